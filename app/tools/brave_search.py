from __future__ import annotations

from typing import Any

from app.models.research import SearchResult
from app.tools.base import SourceAdapter, normalize_result

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
SOURCE_LABEL = "Brave Search"


def parse_brave_payload(payload: Any) -> list[SearchResult]:
    """Map a Brave web search response body to SearchResults."""
    if not isinstance(payload, dict):
        return []
    web = payload.get("web")
    if not isinstance(web, dict):
        return []
    raw_results = web.get("results")
    if not isinstance(raw_results, list):
        return []
    mapped: list[SearchResult] = []
    for item in raw_results:
        if not isinstance(item, dict):
            continue
        snippets = item.get("extra_snippets", []) or []
        description = item.get("description", "") or ""
        content = description.strip() or " ".join(s for s in snippets if isinstance(s, str)).strip()
        result = normalize_result(
            item.get("title"),
            item.get("url"),
            content,
            source=SOURCE_LABEL,
        )
        if result is not None:
            mapped.append(result)
    return mapped


class BraveSearchAdapter(SourceAdapter):
    name = "brave"
    label = SOURCE_LABEL

    def __init__(self, api_key: str, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    async def _search(self, query: str) -> list[SearchResult]:
        if not self.api_key:
            raise RuntimeError("BRAVE_API_KEY is not configured")

        params: dict[str, Any] = {
            "q": query,
            "count": self.max_results,
        }
        async with self._client(
            {
                "Accept": "application/json",
                "X-Subscription-Token": self.api_key,
            }
        ) as client:
            response = await client.get(BRAVE_SEARCH_URL, params=params)
            response.raise_for_status()
            payload = response.json()

        return parse_brave_payload(payload)
