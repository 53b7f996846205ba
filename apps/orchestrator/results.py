"""Value objects passed between the plan, delegate, integrate and verify steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from econta.core.changelog import ChangeLogEntry
from econta.core.classifier import HandlerName, TaskCategory


@dataclass(frozen=True)
class TaskPlan:
    task_type: TaskCategory
    handlers: Tuple[HandlerName, ...]
    parallel: bool = False


@dataclass(slots=True)
class HandlerResult:
    handler: str
    success: bool
    output: str
    files: List[str] = field(default_factory=list)
    errors: List[str] | None = None

    @classmethod
    def succeeded(cls, handler: str, output: str, files: List[str] | None = None) -> "HandlerResult":
        return cls(handler=handler, success=True, output=output, files=list(files or []))

    @classmethod
    def failed(cls, handler: str, message: str) -> "HandlerResult":
        return cls(handler=handler, success=False, output="", files=[], errors=[message])


@dataclass(frozen=True)
class NotationDeclaration:
    """A ``% notation: symbol = meaning`` line found in handler output."""

    symbol: str
    meaning: str
    source: str


@dataclass(slots=True)
class IntegratedResult:
    report: str
    files: List[str] = field(default_factory=list)
    notation: List[NotationDeclaration] = field(default_factory=list)
    lecture_number: int | None = None


@dataclass(slots=True)
class VerificationResult:
    passed: bool = True
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(slots=True)
class OrchestratorRun:
    success: bool
    report: str
    plan: TaskPlan
    files: List[str]
    verification: VerificationResult
    change_log: List[ChangeLogEntry]


__all__ = [
    "HandlerResult",
    "IntegratedResult",
    "NotationDeclaration",
    "OrchestratorRun",
    "TaskPlan",
    "VerificationResult",
]
