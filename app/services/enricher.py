from __future__ import annotations

import asyncio
from typing import Sequence

from app.models.research import SearchResult
from app.services.logger import log_event
from app.tools.content_extractor import ContentExtractor


def _pick_snippet(current: str, excerpt: str, max_chars: int) -> str:
    candidate = excerpt[:max_chars].rstrip()
    if len(candidate) > len(current):
        return candidate
    return current


async def enrich_results(
    results: Sequence[SearchResult],
    extractor: ContentExtractor,
    *,
    top_k: int = 5,
    max_chars: int = 500,
) -> list[SearchResult]:
    """Replace the snippets of the top_k results with longer page excerpts.

    A snippet is only ever replaced by a longer one; results past top_k are
    returned untouched.
    """
    head = list(results[: max(top_k, 0)])
    tail = list(results[len(head):])
    if not head:
        return tail

    excerpts = await asyncio.gather(
        *(extractor.extract(r.url) for r in head),
        return_exceptions=True,
    )

    enriched: list[SearchResult] = []
    improved = 0
    for result, excerpt in zip(head, excerpts):
        if isinstance(excerpt, BaseException) or not excerpt:
            enriched.append(result)
            continue
        current = result.snippet or ""
        snippet = _pick_snippet(current, excerpt, max_chars)
        if snippet is current:
            enriched.append(result)
            continue
        improved += 1
        enriched.append(result.with_snippet(snippet))

    log_event(
        event_type="enrichment_completed",
        message="Enrichment completed",
        attempted=len(head),
        improved=improved,
    )
    return enriched + tail
