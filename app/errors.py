from __future__ import annotations


class AggregationError(Exception):
    """Base class for failures surfaced by the aggregation facade."""


class InvalidJobError(AggregationError):
    """The job title is missing, blank, or not a string."""


class AggregationFailedError(AggregationError):
    """An unexpected error aborted the pipeline; callers answer with fallback links."""
