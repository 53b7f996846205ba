"""Pipeline bootstrap and run helpers for the teaching assistant."""

from __future__ import annotations

from .bootstrap import bootstrap_run
from .context import TAContext, TAPaths
from .runtime import TaskRunOutcome, build_orchestrator, run_task

__all__ = [
    "TAContext",
    "TAPaths",
    "TaskRunOutcome",
    "bootstrap_run",
    "build_orchestrator",
    "run_task",
]
