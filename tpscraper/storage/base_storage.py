"""Base storage interface for review data."""

from abc import ABC, abstractmethod
from pathlib import Path

from tpscraper.models.review import Review


class BaseStorage(ABC):
    """
    Abstract base class for review storage backends.

    Defines the interface that all storage implementations must follow.
    """

    @abstractmethod
    async def save(self, reviews: list[Review]) -> int:
        """
        Save reviews to storage.

        Args:
            reviews: List of Review objects to save

        Returns:
            Number of reviews saved
        """
        pass


class FileStorage(BaseStorage):
    """Base class for file-based storage backends."""

    extension: str = ""

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)

    @classmethod
    def for_prefix(cls, output_dir: str | Path, prefix: str) -> "FileStorage":
        """Create a storage writing ``<output_dir>/<prefix><extension>``."""
        return cls(Path(output_dir) / f"{prefix}{cls.extension}")

    def _ensure_parent_exists(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
