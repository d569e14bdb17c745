from __future__ import annotations

from typing import Iterable

from app.models.research import RiskLevel, RiskSummary, SearchResult, Timeline

MAX_KEY_FACTORS = 5

# Checked in order; the first matching phrase set decides.
RISK_RULES: tuple[tuple[RiskLevel, tuple[str, ...]], ...] = (
    (RiskLevel.HIGH, ("high risk", "likely to be replaced")),
    (RiskLevel.LOW, ("low risk", "difficult to automate")),
)

TIMELINE_RULES: tuple[tuple[Timeline, tuple[str, ...]], ...] = (
    (Timeline.NEXT_10_YEARS, ("next decade", "10 years")),
    (Timeline.NEXT_10_TO_20_YEARS, ("20 years", "long term")),
    (Timeline.ALREADY_HAPPENING, ("immediate", "already")),
)

KEY_FACTOR_RULES: tuple[tuple[str, str], ...] = (
    ("repetitive", "Contains repetitive tasks"),
    ("creative", "Requires creativity"),
    ("emotional", "Involves emotional intelligence"),
    ("physical", "Requires physical presence"),
    ("complex", "Involves complex decision making"),
)


def corpus_text(results: Iterable[SearchResult]) -> str:
    return " ".join(f"{r.title} {r.snippet or ''}" for r in results).lower()


def _first_match(text: str, rules, default):
    for value, phrases in rules:
        if any(phrase in text for phrase in phrases):
            return value
    return default


def summarize(results: Iterable[SearchResult]) -> RiskSummary:
    """Classify risk, timeline and key factors from keyword signals."""
    text = corpus_text(results)
    key_factors = [label for keyword, label in KEY_FACTOR_RULES if keyword in text]
    return RiskSummary(
        risk_level=_first_match(text, RISK_RULES, RiskLevel.MEDIUM),
        key_factors=key_factors[:MAX_KEY_FACTORS],
        timeline=_first_match(text, TIMELINE_RULES, Timeline.NEXT_5_TO_10_YEARS),
    )
