from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.tools.base import SourceAdapter


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Timeline(str, Enum):
    ALREADY_HAPPENING = "Already happening"
    NEXT_5_TO_10_YEARS = "Next 5-10 years"
    NEXT_10_YEARS = "Next 10 years"
    NEXT_10_TO_20_YEARS = "Next 10-20 years"


class AggregationState(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    DEDUPLICATING = "deduplicating"
    RANKING = "ranking"
    ENRICHING = "enriching"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One discovered item, normalized across providers."""
    title: str
    url: str
    snippet: str = ""
    source: str | None = None
    relevance_score: float | None = None

    def with_score(self, score: float) -> SearchResult:
        return replace(self, relevance_score=score)

    def with_snippet(self, snippet: str) -> SearchResult:
        return replace(self, snippet=snippet)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "source": self.source,
            "relevanceScore": self.relevance_score,
        }


@dataclass(frozen=True, slots=True)
class QuerySpec:
    query: str
    adapter: SourceAdapter


@dataclass(slots=True)
class RiskSummary:
    risk_level: RiskLevel = RiskLevel.MEDIUM
    key_factors: list[str] = field(default_factory=list)
    timeline: Timeline = Timeline.NEXT_5_TO_10_YEARS

    def to_dict(self) -> dict[str, Any]:
        return {
            "riskLevel": self.risk_level.value,
            "keyFactors": list(self.key_factors),
            "timeline": self.timeline.value,
        }


@dataclass(slots=True)
class AggregationReport:
    job: str
    results: list[SearchResult]
    summary: RiskSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "job": self.job,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
        }
