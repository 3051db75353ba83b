"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from tpscraper.antibot.delays import DelayManager
from tpscraper.core.page_driver import DocumentHandle, NavigationResponse, PageDriver
from tpscraper.core.retry_handler import RetryHandler
from tpscraper.core.traversal import TraversalController
from tpscraper.exceptions import TransientNavigationError
from tpscraper.models.review import Review
from tpscraper.models.run_config import DelayWindow, RunConfig
from tpscraper.scrapers.trustpilot import TrustpilotExtractor

BASE_URL = "https://www.trustpilot.com/review/example.com"


def raw_review(index: int, text: str | None = None, **overrides) -> dict:
    """Build one review as it appears in the embedded payload."""
    review = {
        "id": f"r{index}",
        "consumer": {"displayName": f"  Reviewer {index} "},
        "dates": {"experiencedDate": "2024-01-05T00:00:00.000Z"},
        "rating": 5,
        "title": f"Title {index}",
        "text": text if text is not None else f"Review number {index} with enough text.",
    }
    review.update(overrides)
    return review


def payload(reviews: list[dict], total_pages: int | None = 1) -> str:
    """Serialize a ``__NEXT_DATA__`` payload."""
    return json.dumps({
        "props": {
            "pageProps": {
                "reviews": reviews,
                "filters": {"pagination": {"currentPage": 1, "totalPages": total_pages}},
            }
        },
        "page": "/review/[businessUnit]",
    })


def page_of(count: int, start: int = 1, total_pages: int = 1) -> str:
    """Payload with ``count`` valid reviews numbered from ``start``."""
    return payload([raw_review(i) for i in range(start, start + count)], total_pages=total_pages)


class FakeElement:
    def __init__(self):
        self.clicked = False

    async def click(self):
        self.clicked = True


class FakeDocument(DocumentHandle):
    """Document returning a canned payload."""

    def __init__(self, raw: str | None, consent: FakeElement | None = None):
        self.raw = raw
        self.consent = consent
        self.selectors: list[str] = []

    async def query(self, selector: str):
        return self.consent

    async def extract_embedded(self, selector: str) -> str | None:
        self.selectors.append(selector)
        return self.raw


class FakeDriver(PageDriver):
    """
    Scripted page driver.

    Each navigation consumes the next response: an exception instance is
    raised, an int is returned as a status with an empty document, a
    ``DocumentHandle`` is served as is, anything else (str or None) is
    served with status 200 as the page payload.
    """

    name = "fake"

    def __init__(self, responses: list):
        self.responses = list(responses)
        self.urls: list[str] = []
        self.started = False
        self.closed = False
        self.screenshots: list[Path] = []

    async def start(self) -> None:
        self.started = True

    async def close(self) -> None:
        self.closed = True

    async def navigate(self, url, wait_until="networkidle", timeout=60.0) -> NavigationResponse:
        self.urls.append(url)
        if not self.responses:
            raise TransientNavigationError(f"No scripted response for {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return NavigationResponse(status=response, document=FakeDocument(None))
        if isinstance(response, DocumentHandle):
            return NavigationResponse(status=200, document=response)
        return NavigationResponse(status=200, document=FakeDocument(response))

    async def screenshot(self, path: Path) -> None:
        self.screenshots.append(path)


@pytest.fixture
def make_config():
    """Factory for run configurations without delays."""
    def _make(**overrides) -> RunConfig:
        values = {
            "listing_base_url": BASE_URL,
            "max_retries": 3,
            "inter_request_delay": DelayWindow(min=0, max=0),
            "output_prefix": "trustpilot_example",
        }
        values.update(overrides)
        return RunConfig(**values)
    return _make


@pytest.fixture
def fast_retry():
    """Retry handler that does not sleep between attempts."""
    return RetryHandler(max_attempts=3, base_delay=0, max_jitter=0)


@pytest.fixture
def no_delay():
    return DelayManager(enabled=False)


@pytest.fixture
def make_controller(make_config, no_delay):
    """Factory returning a controller and the fake driver behind it."""
    def _make(responses: list, **config_overrides):
        config = make_config(**config_overrides)
        driver = FakeDriver(responses)
        controller = TraversalController(
            config,
            driver,
            TrustpilotExtractor(),
            retry_handler=RetryHandler(max_attempts=config.max_retries, base_delay=0, max_jitter=0),
            delay_manager=no_delay,
        )
        return controller, driver
    return _make


@pytest.fixture
def sample_reviews():
    """Create a list of sample reviews."""
    return [
        Review(
            reviewer_name="Jane Doe",
            date_experience="January 5, 2024",
            rating="5",
            title="Great service",
            review_text="Excellent product, fast shipping, great quality!",
        ),
        Review(
            reviewer_name="John \"JJ\" Smith",
            date_experience="February 1, 2024",
            rating="1",
            title="N/A",
            review_text="Terrible experience, the product broke after one day.",
        ),
        Review(
            review_text="Average product, nothing special but works as expected.",
        ),
    ]


@pytest.fixture
def make_raw_review():
    return raw_review


@pytest.fixture
def make_payload():
    return payload


@pytest.fixture
def make_page():
    return page_of


@pytest.fixture
def make_driver():
    """Factory for scripted fake drivers."""
    return FakeDriver


@pytest.fixture
def make_document():
    return FakeDocument


@pytest.fixture
def consent_button():
    return FakeElement()
