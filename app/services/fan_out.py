from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Sequence

from app.models.research import QuerySpec, SearchResult
from app.services.logger import log_event, logger
from app.tools.base import SourceAdapter

QUERY_TEMPLATES: tuple[str, ...] = (
    '"{job}" "artificial intelligence" automation probability',
    'AI replace "{job}" timeline research',
    '"{job}" job security artificial intelligence study',
    'future of "{job}" automation risk percentage',
    '"{job}" skills AI cannot replace',
    '"{job}" augmentation vs replacement AI',
)


def build_query_specs(
    job: str,
    adapters: Sequence[SourceAdapter],
    templates: Sequence[str] = QUERY_TEMPLATES,
) -> list[QuerySpec]:
    """Cross product of templates x adapters, template-major."""
    cleaned = " ".join(job.split()).strip()
    if not cleaned:
        return []
    return [
        QuerySpec(query=template.format(job=cleaned), adapter=adapter)
        for template in templates
        for adapter in adapters
    ]


@dataclass(slots=True)
class FanOutOutcome:
    results: list[SearchResult] = field(default_factory=list)
    fulfilled: int = 0
    rejected: int = 0
    cancelled: int = 0


class FanOutCoordinator:
    """Runs every QuerySpec concurrently and keeps whatever settles successfully.

    Each adapter enforces its own timeout. ``deadline_seconds`` bounds the
    whole batch: calls still running when it expires are cancelled and
    contribute nothing.
    """

    def __init__(
        self,
        adapters: Sequence[SourceAdapter],
        *,
        templates: Sequence[str] = QUERY_TEMPLATES,
        deadline_seconds: float | None = 10.0,
    ):
        self.adapters = list(adapters)
        self.templates = tuple(templates)
        self.deadline_seconds = deadline_seconds

    async def gather(self, job: str) -> FanOutOutcome:
        specs = build_query_specs(job, self.adapters, self.templates)
        outcome = FanOutOutcome()
        if not specs:
            return outcome

        started = time.monotonic()
        tasks = [asyncio.create_task(spec.adapter.search(spec.query)) for spec in specs]
        try:
            _done, pending = await asyncio.wait(tasks, timeout=self.deadline_seconds)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        # Walk in query order so the merged sequence is deterministic.
        for spec, task in zip(specs, tasks):
            if task.cancelled():
                outcome.cancelled += 1
                continue
            exc = task.exception()
            if exc is not None:
                outcome.rejected += 1
                logger.warning(f"Search source '{spec.adapter.name}' rejected: {type(exc).__name__}: {exc}")
                continue
            outcome.fulfilled += 1
            outcome.results.extend(task.result())

        log_event(
            event_type="fan_out_settled",
            message="Fan-out settled",
            queries=len(specs),
            fulfilled=outcome.fulfilled,
            rejected=outcome.rejected,
            cancelled=outcome.cancelled,
            results=len(outcome.results),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return outcome
