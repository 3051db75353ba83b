"""CSV storage for review data."""

from pathlib import Path

import aiofiles
from loguru import logger

from tpscraper.models.review import Review
from tpscraper.storage.base_storage import FileStorage

CSV_HEADER = "Reviewer Name,Date of Experience,Rating,Title,Review Text"


def quote_field(value: str) -> str:
    """Enclose a field in double quotes, doubling any quotes inside it."""
    return '"' + value.replace('"', '""') + '"'


def format_row(review: Review) -> str:
    return ",".join(
        quote_field(value)
        for value in (
            review.reviewer_name,
            review.date_experience,
            review.rating,
            review.title,
            review.review_text,
        )
    )


class CsvStorage(FileStorage):
    """
    Flat CSV export of reviews.

    The header row is unquoted, every data field is quoted and rows are
    separated by a single newline with no trailing newline.
    """

    extension = ".csv"

    def render(self, reviews: list[Review]) -> str:
        """Render the full file content."""
        return CSV_HEADER + "\n" + "\n".join(format_row(r) for r in reviews)

    async def save(self, reviews: list[Review]) -> int:
        """Write reviews to the CSV file, replacing any previous content."""
        self._ensure_parent_exists()
        try:
            async with aiofiles.open(self.filepath, "w", encoding="utf-8", newline="") as f:
                await f.write(self.render(reviews))
        except OSError as e:
            logger.error(f"Error saving to {self.filepath}: {e}")
            raise

        logger.info(f"Saved {len(reviews)} reviews to {self.filepath}")
        return len(reviews)


def csv_path_for(json_path: str | Path) -> Path:
    """Default CSV path next to a JSON export."""
    return Path(json_path).with_suffix(CsvStorage.extension)
