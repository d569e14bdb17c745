from __future__ import annotations

from typing import Any

from app.models.research import SearchResult
from app.tools.base import SourceAdapter, normalize_result

SEMANTIC_SCHOLAR_URL = "https://api.semanticscholar.org/graph/v1/paper/search"
PAPER_PAGE_URL = "https://www.semanticscholar.org/paper/{paper_id}"
SOURCE_LABEL = "Scholar"
ABSTRACT_CHARS = 300


def parse_scholar_payload(payload: Any) -> list[SearchResult]:
    """Map a Semantic Scholar paper search body to SearchResults."""
    if not isinstance(payload, dict):
        return []
    papers = payload.get("data")
    if not isinstance(papers, list):
        return []

    results: list[SearchResult] = []
    for paper in papers:
        if not isinstance(paper, dict):
            continue
        url = paper.get("url")
        if not url and paper.get("paperId"):
            url = PAPER_PAGE_URL.format(paper_id=paper["paperId"])
        abstract = paper.get("abstract") or ""
        if not isinstance(abstract, str):
            abstract = ""
        year = paper.get("year")
        snippet = abstract[:ABSTRACT_CHARS]
        if isinstance(year, int):
            snippet = f"({year}) {snippet}".strip()
        result = normalize_result(paper.get("title"), url, snippet, source=SOURCE_LABEL)
        if result is not None:
            results.append(result)
    return results


class ScholarSearchAdapter(SourceAdapter):
    name = "scholar"
    label = SOURCE_LABEL
    academic = True

    def __init__(self, api_key: str = "", **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    async def _search(self, query: str) -> list[SearchResult]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        params = {
            "query": query,
            "limit": min(self.max_results, 100),
            "fields": "title,abstract,url,year,paperId",
        }
        async with self._client(headers) as client:
            response = await client.get(SEMANTIC_SCHOLAR_URL, params=params)
            response.raise_for_status()
            payload = response.json()

        return parse_scholar_payload(payload)
