"""Page-by-page traversal of a paginated review listing."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from tpscraper.antibot.delays import DelayManager
from tpscraper.core.extractor import RecordExtractor
from tpscraper.core.page_driver import DocumentHandle, PageDriver
from tpscraper.core.retry_handler import RetryHandler
from tpscraper.exceptions import (
    ExtractionError,
    FatalNavigationError,
    RetryExhaustedError,
    TransientNavigationError,
)
from tpscraper.models.review import PageExtractionResult, Review
from tpscraper.models.run_config import RunConfig

CONSENT_SETTLE_SECONDS = 1.0


class TerminationReason(str, Enum):
    """Why a traversal stopped."""
    MAX_RECORDS_REACHED = "max-records-reached"
    MAX_PAGES_REACHED = "max-pages-reached"
    LAST_PAGE_REACHED = "last-page-reached"
    EMPTY_PAGE = "empty-page"
    EXTRACTION_ERROR = "extraction-error"


@dataclass
class TraversalState:
    """Mutable state of one traversal, owned by the controller."""
    current_page: int = 1
    total_pages: int = 0
    accumulated: list[Review] = field(default_factory=list)
    reason: TerminationReason | None = None
    error: ExtractionError | None = None

    @property
    def terminated(self) -> bool:
        return self.reason is not None

    def terminate(self, reason: TerminationReason, error: ExtractionError | None = None) -> None:
        self.reason = reason
        self.error = error


@dataclass(frozen=True)
class TraversalResult:
    """Snapshot of a finished traversal."""
    records: list[Review]
    reason: TerminationReason
    pages_visited: int
    total_pages: int
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.reason is TerminationReason.EXTRACTION_ERROR


class TraversalController:
    """
    Drives navigation, extraction and termination checks page by page.

    Each page goes through navigate (with retry), extract and evaluate.
    Evaluation order matters: the record cap wins over the page cap, which
    wins over the listing's own last page. Pages are fetched strictly one
    after the other.
    """

    name = "traversal"

    def __init__(
        self,
        config: RunConfig,
        driver: PageDriver,
        extractor: RecordExtractor,
        retry_handler: RetryHandler | None = None,
        delay_manager: DelayManager | None = None,
    ):
        self.config = config
        self.driver = driver
        self.extractor = extractor
        self.retry_handler = retry_handler or RetryHandler(max_attempts=config.max_retries)
        self.delay_manager = delay_manager or DelayManager(
            min_delay=config.inter_request_delay.min,
            max_delay=config.inter_request_delay.max,
        )
        self.state = TraversalState()
        self.navigations = 0

    def page_url(self, page: int) -> str:
        """URL of the given listing page (the base URL for page 1)."""
        base = self.config.listing_base_url
        if page <= 1:
            return base
        separator = "&" if "?" in base else "?"
        return f"{base}{separator}page={page}"

    async def run(self) -> TraversalResult:
        """
        Traverse the listing until a termination condition holds.

        Returns:
            The traversal result, including the reason it stopped

        Raises:
            FatalNavigationError: if a page could not be loaded within the retry budget
        """
        state = self.state
        logger.info(f"[{self.name}] Starting traversal of {self.config.listing_base_url}")

        while not state.terminated:
            page = state.current_page
            document = await self._navigate(page)

            if page > 1:
                delay = await self.delay_manager.wait()
                logger.debug(f"[{self.name}] Waited {delay:.2f}s after page {page}")
            else:
                await self._dismiss_consent(document)

            await self._capture(page)

            logger.info(f"[{self.name}] Processing page {page}...")
            try:
                result = await self.extractor.extract(document)
            except ExtractionError as e:
                logger.error(f"[{self.name}] Error processing page {page}: {e}")
                state.terminate(TerminationReason.EXTRACTION_ERROR, error=e)
                break

            self.evaluate(result)

        logger.info(
            f"[{self.name}] Stopped at page {state.current_page} ({state.reason.value}) "
            f"with {len(state.accumulated)} reviews"
        )
        return TraversalResult(
            records=list(state.accumulated),
            reason=state.reason,
            pages_visited=state.current_page,
            total_pages=state.total_pages,
            error=str(state.error) if state.error else None,
        )

    def evaluate(self, result: PageExtractionResult) -> None:
        """Apply one page's extraction result and decide whether to continue."""
        state = self.state
        page = state.current_page

        if page == 1:
            state.total_pages = result.total_pages
            logger.info(f"[{self.name}] Total pages available: {state.total_pages}")

        if not result.records:
            logger.info(f"[{self.name}] No reviews found on page {page}")
            state.terminate(TerminationReason.EMPTY_PAGE)
            return

        state.accumulated.extend(result.records)
        logger.info(
            f"[{self.name}] Found {len(result.records)} reviews on page {page} "
            f"({len(state.accumulated)} total)"
        )

        max_records = self.config.max_records
        if max_records > 0 and len(state.accumulated) >= max_records:
            logger.info(f"[{self.name}] Reached the maximum number of reviews ({max_records})")
            del state.accumulated[max_records:]
            state.terminate(TerminationReason.MAX_RECORDS_REACHED)
        elif self.config.max_pages > 0 and page >= self.config.max_pages:
            logger.info(f"[{self.name}] Reached maximum number of pages ({self.config.max_pages})")
            state.terminate(TerminationReason.MAX_PAGES_REACHED)
        elif page >= state.total_pages:
            logger.info(f"[{self.name}] Reached last page")
            state.terminate(TerminationReason.LAST_PAGE_REACHED)
        else:
            state.current_page += 1

    async def _navigate(self, page: int) -> DocumentHandle:
        url = self.page_url(page)
        label = "Page navigation" if page == 1 else f"Page {page} navigation"
        logger.info(f"[{self.name}] Navigating to: {url}")

        async def attempt() -> DocumentHandle:
            self.navigations += 1
            response = await self.driver.navigate(
                url,
                wait_until="networkidle",
                timeout=self.config.navigation_timeout,
            )
            logger.debug(f"[{self.name}] HTTP Response Code: {response.status}")
            if not response.ok:
                raise TransientNavigationError(
                    f"Failed to load page: {response.status}", status=response.status
                )
            return response.document

        try:
            return await self.retry_handler.execute(attempt, label=label)
        except RetryExhaustedError as e:
            status = getattr(e.last_error, "status", None)
            raise FatalNavigationError(
                url,
                page,
                e.attempts,
                records=self.state.accumulated,
                status=status,
            ) from e

    async def _dismiss_consent(self, document: DocumentHandle) -> None:
        selector = self.extractor.consent_selector
        if not selector:
            return
        try:
            button = await document.query(selector)
            if button:
                logger.info(f"[{self.name}] Accepting cookies...")
                await button.click()
                await asyncio.sleep(CONSENT_SETTLE_SECONDS)
        except Exception as e:
            logger.debug(f"[{self.name}] No cookie consent dialog handled: {e}")

    async def _capture(self, page: int) -> None:
        if not self.config.screenshot_dir:
            return
        path = self.config.screenshot_dir / f"{self.config.output_prefix}_page{page}.png"
        try:
            await self.driver.screenshot(path)
        except Exception as e:
            logger.warning(f"[{self.name}] Could not save screenshot {path}: {e}")
