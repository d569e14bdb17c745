from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.errors import AggregationFailedError, InvalidJobError
from app.models.schemas import (
    AggregationReportResponse,
    ErrorResponse,
    FallbackLink,
    FallbackResponse,
    SearchRequest,
)
from app.services import logger as log_service
from app.services.aggregator import ResearchAggregator, fallback_results

router = APIRouter(prefix="/api/search", tags=["search"])

INVALID_BODY_ERROR = "Request body must be a JSON object"


def get_aggregator() -> ResearchAggregator:
    """New aggregator per request; nothing is shared between calls."""
    return ResearchAggregator.from_settings()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


@router.post(
    "",
    response_model=AggregationReportResponse,
    responses={400: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SearchRequest.model_json_schema()}},
        }
    },
)
async def search_job(request: Request):
    """Aggregate automation-risk research for one job title."""
    try:
        payload = await request.json()
    except ValueError:
        return _bad_request(INVALID_BODY_ERROR)
    if not isinstance(payload, dict):
        return _bad_request(INVALID_BODY_ERROR)
    job = SearchRequest.model_validate(payload).job

    try:
        aggregator = get_aggregator()
        report = await aggregator.analyze(job)
    except InvalidJobError as e:
        return _bad_request(str(e))
    except AggregationFailedError as e:
        log_service.log_event(
            event_type="aggregation_fallback",
            message="Serving curated fallback links",
            job=str(job)[:100],
            error=str(e),
        )
        fallback = FallbackResponse(
            job=job if isinstance(job, str) else None,
            error="Failed to analyze job",
            fallback_results=[FallbackLink(**item) for item in fallback_results()],
        )
        return JSONResponse(status_code=200, content=fallback.model_dump(by_alias=True))

    return AggregationReportResponse.from_report(report)
