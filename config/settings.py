"""Application settings loaded from environment variables."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Literal["development", "production"] = "development"
    debug: bool = False

    # Project paths
    base_dir: Path = Field(default_factory=lambda: Path.cwd())

    @property
    def output_dir(self) -> Path:
        return self.base_dir

    @property
    def debug_dir(self) -> Path:
        return self.base_dir / "debug"

    @property
    def log_dir(self) -> Path:
        return self.base_dir / "logs"

    # Listing
    listing_base_url: str = "https://www.trustpilot.com/review"

    # Scraping settings
    min_request_delay: float = 2.0
    max_request_delay: float = 5.0
    navigation_timeout: float = 60.0
    max_retries: int = 3

    # Proxy settings
    proxy: str | None = None

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/scraper.log"

    # Browser automation
    browser_headless: bool = True
    user_agent_profile: Literal["desktop", "mobile"] = "desktop"


# Global settings instance
settings = Settings()
