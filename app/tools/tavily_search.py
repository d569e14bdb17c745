from __future__ import annotations

from typing import Any

from tavily import AsyncTavilyClient

from app.models.research import SearchResult
from app.tools.base import SourceAdapter, normalize_result

SOURCE_LABEL = "Tavily"


def parse_tavily_response(response: Any) -> list[SearchResult]:
    """Map a Tavily search response to SearchResults."""
    if not isinstance(response, dict):
        return []
    raw_results = response.get("results")
    if not isinstance(raw_results, list):
        return []
    results: list[SearchResult] = []
    for r in raw_results:
        if not isinstance(r, dict):
            continue
        result = normalize_result(r.get("title"), r.get("url"), r.get("content", ""), source=SOURCE_LABEL)
        if result is not None:
            results.append(result)
    return results


class TavilySearchAdapter(SourceAdapter):
    name = "tavily"
    label = SOURCE_LABEL

    def __init__(self, api_key: str, *, search_depth: str = "basic", **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.search_depth = search_depth

    async def _search(self, query: str) -> list[SearchResult]:
        if not self.api_key:
            raise RuntimeError("TAVILY_API_KEY is not configured")

        client = AsyncTavilyClient(api_key=self.api_key)
        kwargs: dict[str, Any] = {
            "query": query,
            "search_depth": self.search_depth,
            "max_results": self.max_results,
            "topic": "general",
            "include_raw_content": False,
        }
        response = await client.search(**kwargs)
        return parse_tavily_response(response)
