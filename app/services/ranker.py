"""Heuristic relevance ranking.

Scores are additive and unnormalized; they only order results. Every call
computes scores from scratch, so ranking an already-ranked list returns the
same scores in the same order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from app.models.research import SearchResult
from app.tools import web_utils

BASE_SCORE = 1.0

DEFAULT_ACADEMIC_SOURCES = frozenset({"Scholar"})
DEFAULT_INSTITUTION_DOMAINS = ("weforum.org", "mckinsey.com")

_AI_PATTERN = re.compile(r"\bai\b|artificial intelligence")


@dataclass(frozen=True, slots=True)
class RankingWeights:
    job_in_title: float = 0.5
    ai_in_title: float = 0.3
    automation_in_title: float = 0.3
    replace_in_title: float = 0.2
    research_in_title: float = 0.4
    academic_source: float = 0.5
    academic_domain: float = 0.4
    government_domain: float = 0.3
    institution_domain: float = 0.3
    recent_year: float = 0.3


def score_result(
    result: SearchResult,
    job: str,
    *,
    current_year: int,
    weights: RankingWeights = RankingWeights(),
    academic_sources: Iterable[str] = DEFAULT_ACADEMIC_SOURCES,
    institution_domains: Sequence[str] = DEFAULT_INSTITUTION_DOMAINS,
) -> float:
    score = BASE_SCORE
    job_lower = " ".join(job.lower().split())
    title = result.title.lower()

    if job_lower and job_lower in title:
        score += weights.job_in_title
    if _AI_PATTERN.search(title):
        score += weights.ai_in_title
    if "automat" in title:
        score += weights.automation_in_title
    if "replace" in title:
        score += weights.replace_in_title
    if "study" in title or "research" in title:
        score += weights.research_in_title

    if result.source in set(academic_sources):
        score += weights.academic_source
    if web_utils.is_academic_domain(result.url):
        score += weights.academic_domain
    if web_utils.is_government_domain(result.url):
        score += weights.government_domain
    if web_utils.matches_domain(result.url, list(institution_domains)):
        score += weights.institution_domain

    snippet = result.snippet or ""
    if str(current_year) in snippet or str(current_year - 1) in snippet:
        score += weights.recent_year

    return round(score, 6)


def rank_results(
    results: Iterable[SearchResult],
    job: str,
    *,
    current_year: int | None = None,
    weights: RankingWeights = RankingWeights(),
    academic_sources: Iterable[str] = DEFAULT_ACADEMIC_SOURCES,
    institution_domains: Sequence[str] = DEFAULT_INSTITUTION_DOMAINS,
) -> list[SearchResult]:
    """Return new scored results sorted by score, descending; ties keep input order."""
    year = current_year if current_year is not None else date.today().year
    academic = frozenset(academic_sources)
    domains = list(institution_domains)
    scored = [
        r.with_score(
            score_result(
                r,
                job,
                current_year=year,
                weights=weights,
                academic_sources=academic,
                institution_domains=domains,
            )
        )
        for r in results
    ]
    # sorted() is stable
    return sorted(scored, key=lambda r: r.relevance_score or 0.0, reverse=True)
