"""Playwright implementation of the page driver."""

from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from config.settings import settings
from tpscraper.antibot.headers import HeaderGenerator
from tpscraper.antibot.user_agents import Profile, UserAgentRotator
from tpscraper.core.page_driver import DocumentHandle, NavigationResponse, PageDriver
from tpscraper.exceptions import TransientNavigationError

PROXY_SCHEMES = ("http://", "https://", "socks4://", "socks5://")

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--window-size=1920,1080",
]


class PlaywrightDocument(DocumentHandle):
    """Document handle backed by a live Playwright page."""

    def __init__(self, page):
        self._page = page

    async def query(self, selector: str) -> Any | None:
        return await self._page.query_selector(selector)

    async def extract_embedded(self, selector: str) -> str | None:
        html = await self._page.content()
        soup = BeautifulSoup(html, "lxml")
        element = soup.select_one(selector)
        if element is None:
            return None
        return element.get_text()


class PlaywrightPageDriver(PageDriver):
    """
    Chromium page driver using Playwright.

    One browser, context and page are opened by ``start()`` and reused for
    every navigation until ``close()``.
    """

    name = "playwright"

    def __init__(
        self,
        headless: bool | None = None,
        user_agent_profile: Profile | None = None,
        proxy: str | None = None,
    ):
        self.headless = settings.browser_headless if headless is None else headless
        self.ua_rotator = UserAgentRotator(user_agent_profile or settings.user_agent_profile)
        self.proxy = proxy if proxy is not None else settings.proxy
        self.header_generator = HeaderGenerator()
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def _proxy_config(self) -> dict[str, str] | None:
        """Return the Playwright proxy setting, or None if no usable proxy is set."""
        if not self.proxy:
            return None
        if self.proxy.startswith(PROXY_SCHEMES):
            logger.info(f"[{self.name}] Using proxy: {self.proxy}")
            return {"server": self.proxy}
        logger.warning(f"[{self.name}] Ignoring proxy '{self.proxy}': expected an http(s) or socks URL")
        return None

    async def start(self) -> None:
        """Launch the browser and open a page."""
        self._playwright = await async_playwright().start()

        launch_kwargs: dict[str, Any] = {"headless": self.headless, "args": BROWSER_ARGS}
        proxy = self._proxy_config()
        if proxy:
            launch_kwargs["proxy"] = proxy

        self._browser = await self._playwright.chromium.launch(**launch_kwargs)

        user_agent = self.ua_rotator.get_random()
        logger.info(f"[{self.name}] Using user agent ({self.ua_rotator.profile}): {user_agent[:50]}...")

        self._context = await self._browser.new_context(
            user_agent=user_agent,
            viewport=self.ua_rotator.viewport,
            is_mobile=self.ua_rotator.is_mobile,
            extra_http_headers=self.header_generator.generate(),
        )
        self._page = await self._context.new_page()
        logger.debug(f"[{self.name}] Browser initialized")

    async def close(self) -> None:
        """Close page, context and browser."""
        if self._page:
            await self._page.close()
            self._page = None
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.debug(f"[{self.name}] Browser closed")

    async def navigate(
        self,
        url: str,
        wait_until: str = "networkidle",
        timeout: float = 60.0,
    ) -> NavigationResponse:
        if not self._page:
            raise RuntimeError("Browser not started. Use 'async with' context manager.")

        logger.debug(f"[{self.name}] Navigating to {url}")
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
        except PlaywrightError as e:
            raise TransientNavigationError(f"Navigation to {url} failed: {e}") from e

        if response is None:
            raise TransientNavigationError(f"Navigation to {url} returned no response")

        return NavigationResponse(status=response.status, document=PlaywrightDocument(self._page))

    async def screenshot(self, path: Path) -> None:
        if not self._page:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        await self._page.screenshot(path=str(path), full_page=True)
        logger.debug(f"[{self.name}] Saved screenshot to {path}")
