from __future__ import annotations

import pytest

from app.models.research import SearchResult
from app.services.enricher import enrich_results


class FakeExtractor:
    def __init__(self, pages: dict[str, str], *, raise_for: set[str] | None = None):
        self.pages = pages
        self.raise_for = raise_for or set()
        self.calls: list[str] = []

    async def extract(self, url: str) -> str:
        self.calls.append(url)
        if url in self.raise_for:
            raise RuntimeError("boom")
        return self.pages.get(url, "")


def _r(i: int, snippet: str = "") -> SearchResult:
    return SearchResult(title=f"T{i}", url=f"https://example.com/{i}", snippet=snippet, relevance_score=10 - i)


@pytest.mark.asyncio
async def test_enrich_only_touches_top_k():
    results = [_r(i, "short") for i in range(7)]
    extractor = FakeExtractor({r.url: "long extracted body " * 5 for r in results})

    enriched = await enrich_results(results, extractor, top_k=5, max_chars=500)

    assert extractor.calls == [r.url for r in results[:5]]
    assert all(r.snippet.startswith("long extracted body") for r in enriched[:5])
    assert [r.snippet for r in enriched[5:]] == ["short", "short"]
    assert [r.url for r in enriched] == [r.url for r in results]
    assert [r.relevance_score for r in enriched] == [r.relevance_score for r in results]


@pytest.mark.asyncio
async def test_enrich_truncates_replacement_to_display_cap():
    results = [_r(0, "tiny")]
    extractor = FakeExtractor({results[0].url: "y" * 2000})

    enriched = await enrich_results(results, extractor, top_k=5, max_chars=500)

    assert enriched[0].snippet == "y" * 500


@pytest.mark.asyncio
async def test_enrich_never_shortens_a_snippet():
    long_snippet = "z" * 600
    results = [
        _r(0, long_snippet),
        _r(1, "a fairly descriptive provider snippet"),
        _r(2, "kept"),
        _r(3, ""),
    ]
    extractor = FakeExtractor(
        {
            results[0].url: "q" * 2000,  # truncated to 500, still shorter than 600
            results[1].url: "short",
            results[3].url: "",
        },
        raise_for={results[2].url},
    )

    enriched = await enrich_results(results, extractor, top_k=5, max_chars=500)

    for before, after in zip(results, enriched):
        assert len(after.snippet) >= len(before.snippet)
    assert enriched[0].snippet == long_snippet
    assert enriched[1].snippet == "a fairly descriptive provider snippet"
    assert enriched[2].snippet == "kept"
    assert enriched[3].snippet == ""


@pytest.mark.asyncio
async def test_enrich_with_zero_top_k_is_a_no_op():
    results = [_r(0, "s")]
    extractor = FakeExtractor({})

    assert await enrich_results(results, extractor, top_k=0) == results
    assert extractor.calls == []
