from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.research import AggregationReport


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class SearchRequest(BaseModel):
    # Validated by the aggregator so a bad value maps to a 400, not a 422.
    job: Any = None


# --- Responses ---


class SearchResultResponse(CamelModel):
    title: str
    url: str
    snippet: str | None = None
    source: str | None = None
    relevance_score: float | None = None


class SummaryResponse(CamelModel):
    risk_level: str
    key_factors: list[str]
    timeline: str


class AggregationReportResponse(CamelModel):
    job: str
    results: list[SearchResultResponse]
    summary: SummaryResponse

    @classmethod
    def from_report(cls, report: AggregationReport) -> AggregationReportResponse:
        return cls(
            job=report.job,
            results=[
                SearchResultResponse(
                    title=r.title,
                    url=r.url,
                    snippet=r.snippet,
                    source=r.source,
                    relevance_score=r.relevance_score,
                )
                for r in report.results
            ],
            summary=SummaryResponse(
                risk_level=report.summary.risk_level.value,
                key_factors=list(report.summary.key_factors),
                timeline=report.summary.timeline.value,
            ),
        )


class FallbackLink(BaseModel):
    title: str
    url: str
    snippet: str


class FallbackResponse(CamelModel):
    job: str | None = None
    error: str
    fallback_results: list[FallbackLink]


class ErrorResponse(BaseModel):
    error: str
