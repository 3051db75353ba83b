"""Interfaces for the rendering engine used to load listing pages."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

HTTP_OK = 200


class DocumentHandle(ABC):
    """A rendered page that can be queried after navigation."""

    @abstractmethod
    async def query(self, selector: str) -> Any | None:
        """
        Find the first element matching a CSS selector.

        Returns:
            An element handle supporting ``await element.click()``, or None
        """
        pass

    @abstractmethod
    async def extract_embedded(self, selector: str) -> str | None:
        """
        Return the text of the embedded data element matching ``selector``.

        Returns:
            The raw payload text, or None if the page has no such element
        """
        pass


@dataclass(frozen=True)
class NavigationResponse:
    """Outcome of a navigation: response status plus the rendered document."""

    status: int
    document: DocumentHandle

    @property
    def ok(self) -> bool:
        return self.status == HTTP_OK


class PageDriver(ABC):
    """
    Abstract page driver holding one browser page for the whole run.

    Implementations raise ``TransientNavigationError`` when a navigation
    times out or the transport fails.
    """

    name: str = "driver"

    @abstractmethod
    async def start(self) -> None:
        """Acquire the underlying browser resources."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying browser resources. Safe to call twice."""
        pass

    @abstractmethod
    async def navigate(
        self,
        url: str,
        wait_until: str = "networkidle",
        timeout: float = 60.0,
    ) -> NavigationResponse:
        """
        Navigate to a URL and wait for it to render.

        Args:
            url: URL to load
            wait_until: Load state to wait for
            timeout: Navigation timeout in seconds
        """
        pass

    async def screenshot(self, path: Path) -> None:
        """Capture a full-page screenshot. Drivers without a display ignore it."""
        return None
