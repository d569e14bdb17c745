from __future__ import annotations

import re
from urllib.parse import quote

from app.models.research import SearchResult
from app.tools.base import SourceAdapter, normalize_result

JINA_SEARCH_URL = "https://s.jina.ai/?q={query}"
SOURCE_LABEL = "Jina"

_FIELD_PATTERN = re.compile(
    r"\[(\d+)\]\s+(Title|URL Source|Description):\s*(.*?)(?=\[\d+\]|$)",
    re.DOTALL,
)


def parse_jina_response(text: str) -> list[SearchResult]:
    """Parse Jina's plain text search response.

    Format:
    [1] Title: ...
    [1] URL Source: ...
    [1] Description: ...

    [2] Title: ...
    """
    blocks: dict[int, dict[str, str]] = {}
    for index_str, field, value in _FIELD_PATTERN.findall(text or ""):
        blocks.setdefault(int(index_str), {})[field] = value.strip()

    results: list[SearchResult] = []
    for index in sorted(blocks):
        block = blocks[index]
        result = normalize_result(
            block.get("Title"),
            block.get("URL Source"),
            block.get("Description", ""),
            source=SOURCE_LABEL,
        )
        if result is not None:
            results.append(result)
    return results


class JinaSearchAdapter(SourceAdapter):
    name = "jina"
    label = SOURCE_LABEL

    def __init__(self, api_key: str, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    async def _search(self, query: str) -> list[SearchResult]:
        if not self.api_key:
            raise RuntimeError("JINA_API_KEY is not configured")

        url = JINA_SEARCH_URL.format(query=quote(query, safe=""))
        async with self._client(
            {
                "Authorization": f"Bearer {self.api_key}",
                "X-Respond-With": "no-content",
            }
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            # Jina search returns plain text, not JSON
            text = response.text

        return parse_jina_response(text)
