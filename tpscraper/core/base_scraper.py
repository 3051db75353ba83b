"""Abstract base class for listing scrapers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from config.settings import settings
from tpscraper.antibot.delays import DelayManager
from tpscraper.core.extractor import RecordExtractor
from tpscraper.core.page_driver import PageDriver
from tpscraper.core.playwright_driver import PlaywrightPageDriver
from tpscraper.core.retry_handler import RetryHandler
from tpscraper.core.traversal import TraversalController, TraversalResult
from tpscraper.exceptions import (
    DriverStartError,
    FatalNavigationError,
    ScrapeAbortedError,
    ScraperError,
)
from tpscraper.models.review import Review
from tpscraper.models.run_config import RunConfig
from tpscraper.pipeline.sink import DatasetSink
from tpscraper.storage.csv_storage import CsvStorage
from tpscraper.storage.json_storage import JsonStorage


@dataclass
class ScrapeOutcome:
    """Final dataset of a run and the files it was written to."""
    result: TraversalResult
    reviews: list[Review] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.result.failed


class BaseScraper(ABC):
    """
    Abstract base class that site-specific scrapers implement.

    Owns the page driver for the duration of a run: the driver is started
    on ``async with`` entry and closed on exit, whatever happens in
    between. Subclasses provide the record extractor for their site.
    """

    # Class-level configuration (override in subclasses)
    name: str = "base"

    def __init__(
        self,
        config: RunConfig,
        driver: PageDriver | None = None,
        output_dir: str | Path | None = None,
        retry_handler: RetryHandler | None = None,
        delay_manager: DelayManager | None = None,
        **driver_options: Any,
    ):
        self.config = config
        self.output_dir = Path(output_dir) if output_dir else settings.output_dir
        self.retry_handler = retry_handler
        self.delay_manager = delay_manager
        self.driver_options = driver_options
        self._driver = driver
        self._started = False

    async def __aenter__(self) -> "BaseScraper":
        """Start the page driver."""
        if self._driver is None:
            self._driver = self.create_driver()
        try:
            await self._driver.start()
        except Exception as e:
            await self._driver.close()
            if isinstance(e, ScraperError):
                raise
            raise DriverStartError(f"Could not start {self._driver.name} driver: {e}") from e
        self._started = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the page driver."""
        if self._driver and self._started:
            await self._driver.close()
            self._started = False
            logger.info(f"[{self.name}] Browser closed")

    @property
    def driver(self) -> PageDriver:
        """Get the running page driver."""
        if not self._started:
            raise RuntimeError("Page driver not started. Use 'async with' context manager.")
        return self._driver

    def create_driver(self) -> PageDriver:
        """Create the default page driver."""
        return PlaywrightPageDriver(**self.driver_options)

    @abstractmethod
    def create_extractor(self) -> RecordExtractor:
        """Create the record extractor for this site."""
        pass

    def create_sink(self) -> DatasetSink:
        """Create the sink writing the JSON and CSV exports."""
        prefix = self.config.output_prefix
        return DatasetSink(
            max_records=self.config.max_records,
            storages=[
                JsonStorage.for_prefix(self.output_dir, prefix),
                CsvStorage.for_prefix(self.output_dir, prefix),
            ],
        )

    async def scrape(self) -> ScrapeOutcome:
        """
        Traverse the listing and write the collected reviews.

        Reviews collected before a failure are written before the error
        propagates.

        Returns:
            The outcome with the final dataset and written files

        Raises:
            FatalNavigationError: if a page could not be loaded
            ScrapeAbortedError: if any other error ended the traversal
        """
        logger.info(f"[{self.name}] Starting scrape of {self.config.listing_base_url}")
        logger.info(f"[{self.name}] Results will be saved with prefix: {self.config.output_prefix}")

        controller = TraversalController(
            self.config,
            self.driver,
            self.create_extractor(),
            retry_handler=self.retry_handler,
            delay_manager=self.delay_manager,
        )
        sink = self.create_sink()

        try:
            result = await controller.run()
        except FatalNavigationError as e:
            logger.error(f"[{self.name}] {e}")
            e.saved_files = await sink.emit(e.records)
            raise
        except Exception as e:
            page = controller.state.current_page
            logger.exception(f"[{self.name}] Unexpected error on page {page}: {e}")
            error = ScrapeAbortedError(
                f"Scraping stopped on page {page}: {e}",
                page=page,
                records=controller.state.accumulated,
            )
            error.saved_files = await sink.emit(error.records)
            raise error from e

        reviews = sink.finalize(result.records)
        files = await sink.emit(reviews)

        if files:
            logger.info(f"[{self.name}] Successfully extracted and saved {len(reviews)} reviews")
        return ScrapeOutcome(result=result, reviews=reviews, files=files)
