"""Storage and export modules for scraped reviews."""

from tpscraper.storage.base_storage import BaseStorage, FileStorage
from tpscraper.storage.csv_storage import CsvStorage
from tpscraper.storage.json_storage import JsonStorage

__all__ = [
    "BaseStorage",
    "FileStorage",
    "CsvStorage",
    "JsonStorage",
]
