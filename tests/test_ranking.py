from __future__ import annotations

import pytest

from app.models.research import SearchResult
from app.services.dedupe import dedupe_results
from app.services.ranker import BASE_SCORE, rank_results, score_result


def _r(title: str, url: str, snippet: str = "", source: str | None = None) -> SearchResult:
    return SearchResult(title=title, url=url, snippet=snippet, source=source)


def test_dedupe_keeps_first_occurrence_and_drops_later_snippets():
    results = [
        _r("A", "https://a.com", "first snippet", "Brave Search"),
        _r("B", "https://b.com"),
        _r("A again", "https://a.com", "a much longer and better second snippet", "Scholar"),
        _r("C", "https://c.com"),
        _r("B again", "https://b.com"),
    ]

    deduped = dedupe_results(results)

    assert [r.url for r in deduped] == ["https://a.com", "https://b.com", "https://c.com"]
    assert deduped[0].snippet == "first snippet"
    assert deduped[0].source == "Brave Search"


def test_dedupe_never_drops_a_distinct_url():
    urls = [f"https://example.com/{i % 7}" for i in range(30)]
    deduped = dedupe_results(_r("t", u) for u in urls)

    assert len({r.url for r in deduped}) == len(deduped)
    assert {r.url for r in deduped} == set(urls)


def test_truck_driver_scenario_ranks_first():
    job = "Truck Driver"
    target = _r(
        "AI Automation Risk for Truck Driver Jobs",
        "https://econ.example.edu/papers/trucking",
        "A 2025 study of long-haul freight.",
        "Scholar",
    )
    plain = [
        _r("Truck stop directory", "https://stops.example.com", "Find a stop"),
        _r("Driving tips", "https://tips.example.com"),
        _r("Truck Driver salary guide", "https://salary.example.com", "Pay data"),
    ]

    ranked = rank_results(plain[:2] + [target] + plain[2:], job, current_year=2026)

    assert ranked[0].url == target.url
    # base + job + ai + automat + scholar + .edu + recent year
    assert ranked[0].relevance_score == pytest.approx(1.0 + 0.5 + 0.3 + 0.3 + 0.5 + 0.4 + 0.3)


def test_score_signals_are_additive():
    result = _r(
        "Research: will artificial intelligence replace nurses?",
        "https://www.weforum.org/agenda/nurses",
        "Published 2024",
    )

    score = score_result(result, "Nurse", current_year=2024, institution_domains=["weforum.org"])

    # job + ai + replace + research + institution + recent year
    assert score == pytest.approx(BASE_SCORE + 0.5 + 0.3 + 0.2 + 0.4 + 0.3 + 0.3)


def test_score_checks_hosts_not_substrings():
    edu_like = _r("x", "https://education-news.com/.edu/story")
    gov = _r("x", "https://www.bls.gov/ooh/")
    edu_abroad = _r("x", "https://cs.unsw.edu.au/paper")

    assert score_result(edu_like, "pilot", current_year=2026) == pytest.approx(BASE_SCORE)
    assert score_result(gov, "pilot", current_year=2026) == pytest.approx(BASE_SCORE + 0.3)
    assert score_result(edu_abroad, "pilot", current_year=2026) == pytest.approx(BASE_SCORE + 0.4)


def test_ai_signal_needs_the_word():
    said = _r("Experts said the job is safe", "https://a.com")
    ai = _r("How AI changes the job", "https://b.com")

    assert score_result(said, "pilot", current_year=2026) == pytest.approx(BASE_SCORE)
    assert score_result(ai, "pilot", current_year=2026) == pytest.approx(BASE_SCORE + 0.3)


def test_old_years_do_not_count_as_recent():
    result = _r("x", "https://a.com", "Data from 2019 and 2023")
    assert score_result(result, "pilot", current_year=2026) == pytest.approx(BASE_SCORE)


def test_rank_is_sorted_and_stable_for_ties():
    results = [
        _r("first plain", "https://1.com"),
        _r("AI outlook", "https://2.com"),
        _r("second plain", "https://3.com"),
        _r("Automation outlook", "https://4.com"),
        _r("third plain", "https://5.com"),
    ]

    ranked = rank_results(results, "pilot", current_year=2026)
    scores = [r.relevance_score for r in ranked]

    assert scores == sorted(scores, reverse=True)
    assert [r.url for r in ranked] == [
        "https://2.com",
        "https://4.com",
        "https://1.com",
        "https://3.com",
        "https://5.com",
    ]


def test_rank_is_a_fixed_point():
    results = [
        _r("AI study on pilots", "https://a.edu/x", "2026 data"),
        _r("pilot jobs", "https://b.com"),
        _r("Automation of cockpits", "https://c.gov/y"),
    ]

    once = rank_results(results, "pilot", current_year=2026)
    twice = rank_results(once, "pilot", current_year=2026)

    assert twice == once


def test_rank_does_not_mutate_inputs():
    original = _r("AI pilot", "https://a.com")
    ranked = rank_results([original], "pilot", current_year=2026)

    assert original.relevance_score is None
    assert ranked[0] is not original
    assert ranked[0].relevance_score is not None
