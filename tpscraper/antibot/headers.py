"""Extra HTTP headers for the browser session."""

import random


class HeaderGenerator:
    """Generates realistic headers to send alongside browser navigations."""

    ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"

    ACCEPT_LANGUAGES = [
        "en-US,en;q=0.9",
        "en-GB,en;q=0.9,en-US;q=0.8",
    ]

    ACCEPT_ENCODING = "gzip, deflate, br"

    def generate(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        """Generate the extra headers for a browser context."""
        headers = {
            "Accept-Language": random.choice(self.ACCEPT_LANGUAGES),
            "Accept": self.ACCEPT_HTML,
            "Accept-Encoding": self.ACCEPT_ENCODING,
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }

        if extra_headers:
            headers.update(extra_headers)

        return headers
