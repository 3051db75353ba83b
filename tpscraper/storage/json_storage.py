"""JSON storage for review data."""

import json

import aiofiles
from loguru import logger

from tpscraper.exceptions import StorageError
from tpscraper.models.review import Review
from tpscraper.storage.base_storage import FileStorage


class JsonStorage(FileStorage):
    """
    JSON file storage for reviews.

    Writes a pretty-printed array of review objects:
    [{"reviewerName": "...", "dateExperience": "...", "rating": "5", "title": "...", "reviewText": "..."}, ...]
    """

    extension = ".json"

    async def save(self, reviews: list[Review]) -> int:
        """
        Save reviews to JSON file.

        Args:
            reviews: Reviews to save

        Returns:
            Number of reviews saved
        """
        data = [r.to_export_dict() for r in reviews]
        content = json.dumps(data, ensure_ascii=False, indent=2)

        self._ensure_parent_exists()
        try:
            async with aiofiles.open(self.filepath, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Error saving to {self.filepath}: {e}")
            raise

        logger.info(f"Saved {len(reviews)} reviews to {self.filepath}")
        return len(reviews)

    async def load(self) -> list[Review]:
        """
        Load reviews from JSON file.

        Items that are not valid reviews are skipped with a warning.

        Raises:
            StorageError: if the file is not valid JSON or not an array
        """
        if not self.filepath.exists():
            return []

        async with aiofiles.open(self.filepath, "r", encoding="utf-8") as f:
            content = await f.read()

        if not content.strip():
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(f"{self.filepath} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise StorageError(
                f"{self.filepath} must contain an array of reviews, got {type(data).__name__}"
            )

        reviews = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object entry in {self.filepath}: {item!r}")
                continue
            try:
                reviews.append(Review(**item))
            except ValueError as e:
                logger.warning(f"Skipping invalid review in {self.filepath}: {e}")

        return reviews
