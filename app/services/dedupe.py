from __future__ import annotations

from typing import Iterable

from app.models.research import SearchResult


def dedupe_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Keep the first result seen for each URL, preserving input order.

    Later duplicates are dropped whole; their snippets are never merged in.
    """
    seen: set[str] = set()
    deduped: list[SearchResult] = []
    for item in results:
        if item.url in seen:
            continue
        seen.add(item.url)
        deduped.append(item)
    return deduped
