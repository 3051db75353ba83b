"""Final deduplication, truncation and hand-off of scraped reviews."""

from pathlib import Path

from loguru import logger

from tpscraper.models.review import Review
from tpscraper.storage.base_storage import FileStorage


class DatasetSink:
    """
    Turns the accumulated reviews into the final dataset and writes it.

    ``finalize`` is pure and idempotent: exact duplicates are dropped
    (first occurrence wins) and the result is cut to ``max_records``.
    An empty dataset writes no files.
    """

    def __init__(self, max_records: int = 0, storages: list[FileStorage] | None = None):
        self.max_records = max_records
        self.storages = storages or []

    def finalize(self, records: list[Review]) -> list[Review]:
        """Deduplicate and truncate, keeping the original order."""
        seen: set[Review] = set()
        unique: list[Review] = []
        for record in records:
            if record in seen:
                continue
            seen.add(record)
            unique.append(record)

        dropped = len(records) - len(unique)
        if dropped:
            logger.debug(f"Dropped {dropped} duplicate reviews")

        if self.max_records > 0:
            return unique[: self.max_records]
        return unique

    async def emit(self, records: list[Review]) -> list[Path]:
        """
        Finalize the records and save them with every configured storage.

        Returns:
            Paths of the files written (empty if there was nothing to write)
        """
        dataset = self.finalize(records)
        if not dataset:
            logger.info("No reviews to save")
            return []

        written = []
        for storage in self.storages:
            await storage.save(dataset)
            written.append(storage.filepath)
        return written
