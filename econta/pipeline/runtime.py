"""Runtime helpers that execute one task against a bootstrapped context."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from apps.orchestrator import CourseOrchestrator, OrchestratorRun, VerificationResult, build_default_registry
from course_state import CourseState

from .context import TAContext

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TaskRunOutcome:
    """What a single invocation produced."""

    success: bool
    report: str
    state: CourseState
    verification: Optional[VerificationResult] = None
    run: Optional[OrchestratorRun] = None


def build_orchestrator(ctx: TAContext) -> CourseOrchestrator:
    registry = build_default_registry(
        ctx.generator,
        ctx.fs,
        ctx.state,
        filename_prefix_limit=ctx.config.orchestrator.filename_prefix_limit,
    )
    return CourseOrchestrator(registry, ctx.fs, ctx.state, config=ctx.config.orchestrator)


def run_task(ctx: TAContext, task: str, context: str | None = None) -> TaskRunOutcome:
    """Run the orchestrator once and persist the course state."""

    orchestrator = build_orchestrator(ctx)
    try:
        run = orchestrator.run(task, context)
        outcome = TaskRunOutcome(
            success=run.success,
            report=run.report,
            state=ctx.state,
            verification=run.verification,
            run=run,
        )
    except Exception as exc:  # noqa: BLE001 - surface as a failed run report
        LOGGER.exception("Task failed")
        outcome = TaskRunOutcome(success=False, report=f"Error: {exc}", state=ctx.state)

    if ctx.store is not None:
        ctx.store.save(ctx.state)
        LOGGER.info("Course state saved to %s", ctx.store.path)
    return outcome


__all__ = ["TaskRunOutcome", "build_orchestrator", "run_task"]
