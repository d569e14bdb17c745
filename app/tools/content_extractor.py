from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx
from bs4 import BeautifulSoup

from app.services.logger import logger
from app.tools import web_utils

# First non-empty match wins.
CONTENT_SELECTORS = (
    "main",
    "[role='main']",
    "article",
    ".article-body",
    ".article-content",
    ".post-content",
    ".entry-content",
    ".content",
    "#content",
)

STRIP_TAGS = ("script", "style", "noscript", "template")

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")

# Downloads stop after this many bytes.
DEFAULT_MAX_BYTES = 2_000_000


@dataclass(slots=True)
class FetchedPage:
    url: str
    status_code: int
    content_type: str
    body: str


Fetcher = Callable[[str], Awaitable[FetchedPage]]


def _is_html(content_type: str) -> bool:
    content_type = content_type.lower()
    return not content_type or any(t in content_type for t in HTML_CONTENT_TYPES)


def _normalize_text(text: str) -> str:
    text = text.replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def extract_text_from_html(raw_html: str, *, max_chars: int = 2000) -> str:
    """Pull the main readable text out of an HTML page."""
    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup(list(STRIP_TAGS)):
        tag.decompose()

    for selector in CONTENT_SELECTORS:
        node = soup.select_one(selector)
        if node is None:
            continue
        text = _normalize_text(node.get_text(" "))
        if text:
            return web_utils.clean_content(text, max_length=max_chars)

    body = soup.body or soup
    return web_utils.clean_content(_normalize_text(body.get_text(" ")), max_length=max_chars)


class ContentExtractor:
    """Fetches a page and returns a bounded plain-text excerpt.

    ``extract`` never raises: timeouts, fetch errors, non-2xx statuses and
    non-HTML responses all produce an empty string.
    """

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        max_chars: int = 2000,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agent: str = "",
        fetcher: Fetcher | None = None,
    ):
        self.timeout = float(timeout)
        self.max_chars = max(int(max_chars), 1)
        self.max_bytes = max(int(max_bytes), 1)
        self.user_agent = user_agent
        self._fetcher = fetcher

    async def extract(self, url: str) -> str:
        if not web_utils.is_valid_url(url):
            return ""
        fetcher = self._fetcher or self._fetch_default
        try:
            page = await asyncio.wait_for(fetcher(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Content extraction timed out for {url}")
            return ""
        except Exception as exc:
            logger.warning(f"Content extraction failed for {url}: {type(exc).__name__}: {exc}")
            return ""

        if page.status_code >= 400:
            logger.warning(f"Content extraction skipped for {url}: HTTP {page.status_code}")
            return ""
        if not _is_html(page.content_type):
            return ""

        try:
            return extract_text_from_html(page.body, max_chars=self.max_chars)
        except Exception as exc:
            logger.warning(f"Content parsing failed for {url}: {type(exc).__name__}: {exc}")
            return ""

    async def _fetch_default(self, url: str) -> FetchedPage:
        headers = {"Accept": "text/html,application/xhtml+xml"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
        ) as client:
            async with client.stream("GET", url) as response:
                content_type = response.headers.get("content-type", "")
                chunks: list[bytes] = []
                if response.status_code < 400 and _is_html(content_type):
                    received = 0
                    async for chunk in response.aiter_bytes():
                        chunks.append(chunk)
                        received += len(chunk)
                        if received >= self.max_bytes:
                            break
                raw = b"".join(chunks)[: self.max_bytes]
                return FetchedPage(
                    url=str(response.url),
                    status_code=response.status_code,
                    content_type=content_type,
                    body=raw.decode(response.charset_encoding or "utf-8", errors="replace"),
                )
