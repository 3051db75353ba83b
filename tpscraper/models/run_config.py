"""Immutable configuration for a single scrape run."""

import re
from pathlib import Path
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from config.settings import settings
from tpscraper.exceptions import ConfigurationError

# More specific suffixes first (.co.uk before .uk)
TLD_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\.co\.uk$", r"\.com\.au$", r"\.co\.nz$", r"\.co\.za$", r"\.co\.jp$", r"\.co\.il$",
        r"\.org\.uk$", r"\.ac\.uk$", r"\.gov\.uk$",
        r"\.com$", r"\.org$", r"\.net$", r"\.info$", r"\.biz$",
        r"\.uk$", r"\.us$", r"\.ca$", r"\.au$", r"\.de$", r"\.fr$", r"\.jp$", r"\.nz$",
    )
]


class DelayWindow(BaseModel):
    """Bounds in seconds for the random delay between page requests."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(default=2.0, ge=0)
    max: float = Field(default=5.0, ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "DelayWindow":
        if self.min > self.max:
            raise ValueError("Delay window minimum must not exceed its maximum")
        return self


class RunConfig(BaseModel):
    """
    Settings for one traversal of a review listing.

    Built once (usually by the CLI) and passed by reference to the
    scraper; instances are frozen. ``0`` for ``max_pages`` or
    ``max_records`` means no limit.
    """

    model_config = ConfigDict(frozen=True)

    listing_base_url: str = Field(..., min_length=1)
    search_filter: str | None = None
    max_pages: int = Field(default=0, ge=0)
    max_records: int = Field(default=0, ge=0)
    max_retries: int = Field(default=3, ge=1)
    inter_request_delay: DelayWindow = Field(default_factory=DelayWindow)
    output_prefix: str = Field(..., min_length=1)
    navigation_timeout: float = Field(default=60.0, gt=0)
    screenshot_dir: Path | None = None

    @classmethod
    def for_domain(
        cls,
        domain: str | None,
        search_term: str | None = None,
        max_pages: int = 0,
        max_records: int = 0,
        screenshot_dir: Path | None = None,
    ) -> "RunConfig":
        """
        Build a run configuration for a company domain.

        Args:
            domain: Company domain as it appears in the listing URL (e.g. 'example.com')
            search_term: Optional term to filter reviews by
            max_pages: Maximum pages to visit (0 for no limit)
            max_records: Maximum reviews to collect (0 for no limit)
            screenshot_dir: Directory for per-page screenshots (None disables them)

        Raises:
            ConfigurationError: if no domain is given or a limit is invalid
        """
        domain = (domain or "").strip()
        if not domain:
            raise ConfigurationError("No domain specified. Pass the company domain to scrape.")

        search_term = (search_term or "").strip() or None

        try:
            return cls(
                listing_base_url=build_listing_url(domain, search_term),
                search_filter=search_term,
                max_pages=max_pages,
                max_records=max_records,
                max_retries=settings.max_retries,
                inter_request_delay=DelayWindow(
                    min=settings.min_request_delay,
                    max=settings.max_request_delay,
                ),
                output_prefix=build_output_prefix(domain, search_term),
                navigation_timeout=settings.navigation_timeout,
                screenshot_dir=screenshot_dir,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid run configuration: {e}") from e


def build_listing_url(domain: str, search_term: str | None = None, base_url: str | None = None) -> str:
    """Build the review listing URL for a company domain."""
    base = (base_url or settings.listing_base_url).rstrip("/")
    url = f"{base}/{domain}"
    if search_term:
        url += f"?search={quote(search_term, safe='')}"
    return url


def build_output_prefix(domain: str, search_term: str | None = None) -> str:
    """
    Derive a filesystem-safe output prefix from the domain and search term.

    'example.co.uk' with search 'late delivery' becomes
    'trustpilot_example_late_delivery'.
    """
    host = domain.split("?")[0].split("/")[0]

    name = host
    for pattern in TLD_PATTERNS:
        if pattern.search(name):
            name = pattern.sub("", name)
            break

    company = re.sub(r"[^a-zA-Z0-9_-]", "", name.replace(".", "_")) or "domain"
    prefix = f"trustpilot_{company}"

    if search_term:
        term = re.sub(r"[^a-zA-Z0-9_-]", "", re.sub(r"\s+", "_", search_term))
        if term:
            prefix += f"_{term}"

    return prefix
