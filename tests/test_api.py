"""Tests for API routes."""
import pytest
from unittest.mock import AsyncMock, patch

from app.errors import AggregationFailedError, InvalidJobError
from app.models.research import AggregationReport, RiskLevel, RiskSummary, SearchResult, Timeline


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import app

    return TestClient(app)


def _fake_aggregator(**analyze_kwargs):
    aggregator = AsyncMock()
    aggregator.analyze = AsyncMock(**analyze_kwargs)
    return aggregator


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "jobrisk"


def test_search_returns_camel_case_report(client):
    report = AggregationReport(
        job="Truck Driver",
        results=[
            SearchResult(
                title="AI Automation Risk for Truck Driver Jobs",
                url="https://transport.example.edu/study",
                snippet="2025 findings",
                source="Scholar",
                relevance_score=3.3,
            )
        ],
        summary=RiskSummary(
            risk_level=RiskLevel.HIGH,
            key_factors=["Contains repetitive tasks"],
            timeline=Timeline.NEXT_10_YEARS,
        ),
    )
    with patch(
        "app.api.routes.search.get_aggregator",
        return_value=_fake_aggregator(return_value=report),
    ):
        response = client.post("/api/search", json={"job": "Truck Driver"})

    assert response.status_code == 200
    data = response.json()
    assert data["job"] == "Truck Driver"
    assert data["results"][0]["relevanceScore"] == 3.3
    assert data["results"][0]["source"] == "Scholar"
    assert data["summary"] == {
        "riskLevel": "High",
        "keyFactors": ["Contains repetitive tasks"],
        "timeline": "Next 10 years",
    }


def test_search_rejects_missing_job(client):
    with patch(
        "app.api.routes.search.get_aggregator",
        return_value=_fake_aggregator(side_effect=InvalidJobError("Job title is required")),
    ):
        response = client.post("/api/search", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Job title is required"}


def test_search_rejects_non_string_job_with_real_aggregator(client):
    response = client.post("/api/search", json={"job": 123})

    assert response.status_code == 400
    assert response.json()["error"] == "Job title is required"


def test_search_serves_fallback_links_on_pipeline_failure(client):
    with patch(
        "app.api.routes.search.get_aggregator",
        return_value=_fake_aggregator(side_effect=AggregationFailedError("boom")),
    ):
        response = client.post("/api/search", json={"job": "Pilot"})

    assert response.status_code == 200
    data = response.json()
    assert data["error"] == "Failed to analyze job"
    assert data["job"] == "Pilot"
    urls = [item["url"] for item in data["fallbackResults"]]
    assert "https://workofthefuture.mit.edu/" in urls
    assert len(urls) == 2


def test_search_serves_fallback_links_on_bad_source_configuration(client):
    from app.config import Settings

    config = Settings(_env_file=None, search_sources="duckduckgo,bing")
    with patch("app.services.aggregator.default_settings", config):
        response = client.post("/api/search", json={"job": "Pilot"})

    assert response.status_code == 200
    data = response.json()
    assert data["error"] == "Failed to analyze job"
    assert len(data["fallbackResults"]) == 2


@pytest.mark.parametrize(
    "body",
    [b"not json", b"", b'["Pilot"]', b'"Pilot"', b"42"],
)
def test_search_rejects_bodies_that_are_not_json_objects(client, body):
    response = client.post(
        "/api/search",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object"}
