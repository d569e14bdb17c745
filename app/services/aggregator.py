from __future__ import annotations

import asyncio
import time
from typing import Any, Sequence

from app.config import Settings, settings as default_settings
from app.errors import AggregationFailedError, InvalidJobError
from app.models.research import AggregationReport, AggregationState, SearchResult
from app.services.dedupe import dedupe_results
from app.services.enricher import enrich_results
from app.services.fan_out import FanOutCoordinator
from app.services.logger import log_aggregation_stage, logger
from app.services.ranker import (
    DEFAULT_ACADEMIC_SOURCES,
    DEFAULT_INSTITUTION_DOMAINS,
    rank_results,
)
from app.services.summarizer import summarize
from app.tools.content_extractor import ContentExtractor
from app.tools.search_provider import build_source_adapters

CURATED_FALLBACK_RESULTS: tuple[dict[str, str], ...] = (
    {
        "title": "Oxford Study on Job Automation",
        "url": "https://www.oxfordmartin.ox.ac.uk/publications/the-future-of-employment/",
        "snippet": "Comprehensive research on automation probability for various occupations",
    },
    {
        "title": "MIT Work of the Future Report",
        "url": "https://workofthefuture.mit.edu/",
        "snippet": "In-depth analysis of AI impact on employment",
    },
)


def fallback_results() -> list[dict[str, str]]:
    return [dict(item) for item in CURATED_FALLBACK_RESULTS]


def validate_job(job: Any) -> str:
    if not isinstance(job, str) or not job.strip():
        raise InvalidJobError("Job title is required")
    return " ".join(job.split())


class ResearchAggregator:
    """Runs one aggregation: fan-out, dedupe, rank, enrich, summarize.

    An instance serves a single call and records the states it passed
    through. Provider and extractor failures are absorbed below this layer;
    only invalid input or an unexpected error moves it to ``FAILED``.
    """

    def __init__(
        self,
        coordinator: FanOutCoordinator,
        extractor: ContentExtractor | None = None,
        *,
        max_results: int = 20,
        enrich_top_k: int = 5,
        enrich_snippet_chars: int = 500,
        institution_domains: Sequence[str] | None = None,
        current_year: int | None = None,
    ):
        self.coordinator = coordinator
        self.extractor = extractor
        self.max_results = max(int(max_results), 0)
        self.enrich_top_k = enrich_top_k
        self.enrich_snippet_chars = enrich_snippet_chars
        self.institution_domains = list(
            DEFAULT_INSTITUTION_DOMAINS if institution_domains is None else institution_domains
        )
        self.current_year = current_year
        self.state = AggregationState.IDLE
        self.transitions: list[AggregationState] = [AggregationState.IDLE]
        self._job = ""

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> ResearchAggregator:
        config = config or default_settings
        try:
            adapters = build_source_adapters(config)
        except ValueError as exc:
            raise AggregationFailedError(f"Invalid search source configuration: {exc}") from exc
        coordinator = FanOutCoordinator(
            adapters,
            deadline_seconds=config.aggregation_deadline_seconds,
        )
        extractor = None
        if config.enrichment_enabled:
            extractor = ContentExtractor(
                timeout=config.extractor_timeout_seconds,
                max_chars=config.extractor_max_chars,
                max_bytes=config.extractor_max_bytes,
                user_agent=config.http_user_agent,
            )
        return cls(
            coordinator,
            extractor,
            max_results=config.report_max_results,
            enrich_top_k=config.enrich_top_k,
            enrich_snippet_chars=config.enrich_snippet_chars,
            institution_domains=config.institution_domain_list,
        )

    def _transition(self, state: AggregationState, **data: Any) -> None:
        self.state = state
        self.transitions.append(state)
        log_aggregation_stage(self._job, state.value, "entered", data or None)

    async def analyze(self, job: Any) -> AggregationReport:
        if self.state is not AggregationState.IDLE:
            raise RuntimeError("ResearchAggregator instances are single-use")

        try:
            cleaned = validate_job(job)
        except InvalidJobError:
            self._transition(AggregationState.FAILED, reason="invalid_job")
            raise

        self._job = cleaned
        started = time.monotonic()
        try:
            report = await self._run(job, cleaned)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception(f"Aggregation failed for job '{cleaned}'")
            self._transition(AggregationState.FAILED, reason=type(exc).__name__)
            raise AggregationFailedError(f"Failed to analyze job: {exc}") from exc

        self._transition(
            AggregationState.DONE,
            results=len(report.results),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return report

    async def _run(self, job: str, cleaned: str) -> AggregationReport:
        self._transition(AggregationState.SEARCHING, sources=len(self.coordinator.adapters))
        outcome = await self.coordinator.gather(cleaned)

        self._transition(AggregationState.DEDUPLICATING, collected=len(outcome.results))
        unique = dedupe_results(outcome.results)

        self._transition(AggregationState.RANKING, unique=len(unique))
        ranked = rank_results(
            unique,
            cleaned,
            current_year=self.current_year,
            academic_sources=self._academic_sources(),
            institution_domains=self.institution_domains,
        )

        self._transition(AggregationState.ENRICHING)
        enriched: list[SearchResult] = ranked
        if self.extractor is not None and self.enrich_top_k > 0:
            enriched = await enrich_results(
                ranked,
                self.extractor,
                top_k=self.enrich_top_k,
                max_chars=self.enrich_snippet_chars,
            )

        self._transition(AggregationState.SUMMARIZING)
        summary = summarize(enriched)

        return AggregationReport(
            job=job,
            results=enriched[: self.max_results],
            summary=summary,
        )

    def _academic_sources(self) -> frozenset[str]:
        labels = {a.label for a in self.coordinator.adapters if getattr(a, "academic", False)}
        return DEFAULT_ACADEMIC_SOURCES | labels
