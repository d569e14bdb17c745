from __future__ import annotations

from urllib.parse import parse_qs, urljoin, urlparse

from bs4 import BeautifulSoup

from app.models.research import SearchResult
from app.tools.base import SourceAdapter, normalize_result

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"
SOURCE_LABEL = "DuckDuckGo"


def unwrap_redirect(href: str) -> str:
    """Resolve DuckDuckGo's ``/l/?uddg=<target>`` redirect links."""
    href = href.strip()
    if href.startswith("//"):
        href = "https:" + href
    parsed = urlparse(urljoin(DUCKDUCKGO_HTML_URL, href))
    if parsed.netloc.endswith("duckduckgo.com") and parsed.path.startswith("/l/"):
        target = parse_qs(parsed.query).get("uddg")
        if target:
            return target[0]
    return href


def parse_duckduckgo_html(html: str) -> list[SearchResult]:
    """Extract organic results from the DuckDuckGo HTML endpoint."""
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []
    for block in soup.select(".result"):
        classes = block.get("class") or []
        if "result--ad" in classes:
            continue
        link = block.select_one("a.result__a")
        if link is None:
            continue
        href = link.get("href") or ""
        snippet_node = block.select_one(".result__snippet")
        result = normalize_result(
            link.get_text(" ", strip=True),
            unwrap_redirect(href),
            snippet_node.get_text(" ", strip=True) if snippet_node else "",
            source=SOURCE_LABEL,
        )
        if result is not None:
            results.append(result)
    return results


class DuckDuckGoSearchAdapter(SourceAdapter):
    """Keyless HTML search; depends on DuckDuckGo's result markup."""

    name = "duckduckgo"
    label = SOURCE_LABEL

    async def _search(self, query: str) -> list[SearchResult]:
        async with self._client({"Accept": "text/html"}) as client:
            response = await client.post(DUCKDUCKGO_HTML_URL, data={"q": query})
            response.raise_for_status()
            html = response.text

        return parse_duckduckgo_html(html)
