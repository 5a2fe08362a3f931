"""Content fetcher: retrieve a URL and reduce it to a bounded text excerpt.

The sanitization pipeline is:

1. parse the HTML and drop non-visible elements (scripts, styles, ...)
2. take the text of ``<body>`` (or the whole document if there is none)
3. collapse whitespace runs to single spaces and trim
4. truncate to ``max_chars``
5. substitute :data:`NO_CONTENT` for an empty result

``ContentFetcher.fetch`` never raises: HTTP failures and transport or parse
exceptions are returned as a failed :class:`FetchResult`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 3000
NO_CONTENT = "No content"
DEFAULT_USER_AGENT = "newsbrief/0.1 (+https://github.com/newsbrief)"

_WHITESPACE = re.compile(r"\s+")
_INVISIBLE_TAGS = ("script", "style", "noscript", "template", "head")


def sanitize_html(html: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Extract visible text from ``html`` as a single bounded line.

    Args:
        html: Raw page markup.
        max_chars: Maximum length of the returned text.

    Returns:
        Whitespace-collapsed text no longer than ``max_chars``, never empty.
    """
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(_INVISIBLE_TAGS):
        tag.decompose()
    root = soup.body or soup
    text = _WHITESPACE.sub(" ", root.get_text(" ")).strip()
    return text[:max_chars].strip() or NO_CONTENT


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single fetch.

    Attributes:
        url: The requested URL.
        ok: Whether a 2xx response was retrieved and parsed.
        text: Sanitized page text on success.
        error: Error message on failure (``Error: ...``).
        status_code: HTTP status when a response was received.
    """

    url: str
    ok: bool
    text: str = ""
    error: str = ""
    status_code: int | None = None


class ContentFetcher:
    """Fetch pages over HTTP and sanitize them for synthesis.

    Usage::

        with ContentFetcher(timeout=10) as fetcher:
            result = fetcher.fetch("https://example.com")
            print(result.text if result.ok else result.error)
    """

    def __init__(
        self,
        timeout: float = 20.0,
        max_chars: int = MAX_CONTENT_CHARS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.max_chars = max_chars
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def fetch(self, url: str) -> FetchResult:
        """Retrieve ``url`` and return its sanitized text or an error."""
        try:
            response = self._client.get(url)
            if not response.is_success:
                error = f"Error: HTTP {response.status_code} for {url}"
                logger.info(error)
                return FetchResult(url=url, ok=False, error=error, status_code=response.status_code)
            text = sanitize_html(response.text, self.max_chars)
        except Exception as exc:
            logger.debug("Fetch of %s failed", url, exc_info=True)
            return FetchResult(url=url, ok=False, error=f"Error: {str(exc) or type(exc).__name__}")

        logger.debug("Fetched %s (%d chars)", url, len(text))
        return FetchResult(url=url, ok=True, text=text, status_code=response.status_code)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> ContentFetcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
