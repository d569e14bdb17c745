from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.models.research import SearchResult
from app.services.logger import log_source_call
from app.tools import web_utils


def normalize_result(
    title: Any,
    url: Any,
    snippet: Any = "",
    *,
    source: str | None = None,
) -> SearchResult | None:
    """Build a SearchResult, or None when the title/URL pair is unusable."""
    if not isinstance(title, str) or not isinstance(url, str):
        return None
    title = web_utils.clean_content(title, max_length=0)
    url = url.strip()
    if not title or not web_utils.is_valid_url(url):
        return None
    if not isinstance(snippet, str):
        snippet = ""
    return SearchResult(
        title=title,
        url=url,
        snippet=web_utils.clean_content(snippet, max_length=0),
        source=source,
    )


class SourceAdapter(ABC):
    """One external search provider behind a fail-soft ``search`` call.

    Subclasses implement ``_search`` and may raise freely from it; ``search``
    enforces the per-call timeout and converts every failure into an empty
    result list.
    """

    name = "source"
    label = "Source"
    academic = False

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        max_results: int = 10,
        user_agent: str = "",
    ):
        self.timeout = float(timeout)
        self.max_results = max(int(max_results), 1)
        self.user_agent = user_agent

    async def search(self, query: str) -> list[SearchResult]:
        started = time.monotonic()
        try:
            results = await asyncio.wait_for(self._search(query), timeout=self.timeout)
        except asyncio.TimeoutError:
            log_source_call(
                self.name,
                query,
                "timeout",
                duration_ms=int((time.monotonic() - started) * 1000),
                error=f"timed out after {self.timeout}s",
            )
            return []
        except Exception as exc:
            log_source_call(
                self.name,
                query,
                "error",
                duration_ms=int((time.monotonic() - started) * 1000),
                error=f"{type(exc).__name__}: {exc}",
            )
            return []

        results = results[: self.max_results]
        log_source_call(
            self.name,
            query,
            "success",
            result_count=len(results),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return results

    @abstractmethod
    async def _search(self, query: str) -> list[SearchResult]:
        """Query the provider; may raise."""
        ...

    def _client(self, headers: dict[str, str] | None = None) -> httpx.AsyncClient:
        merged = {"User-Agent": self.user_agent} if self.user_agent else {}
        merged.update(headers or {})
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=merged,
            follow_redirects=True,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(timeout={self.timeout})"
