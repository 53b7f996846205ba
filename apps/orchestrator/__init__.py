"""Course orchestrator and TA handler interface."""
from .orchestrator import CourseOrchestrator, extract_notation
from .registry import HANDLER_CLASSES, HandlerRegistry, build_default_registry
from .report import render_final_report, render_integrated_report
from .results import (
    HandlerResult,
    IntegratedResult,
    NotationDeclaration,
    OrchestratorRun,
    TaskPlan,
    VerificationResult,
)

__all__ = [
    "CourseOrchestrator",
    "HandlerRegistry",
    "HANDLER_CLASSES",
    "build_default_registry",
    "extract_notation",
    "render_final_report",
    "render_integrated_report",
    "HandlerResult",
    "IntegratedResult",
    "NotationDeclaration",
    "OrchestratorRun",
    "TaskPlan",
    "VerificationResult",
]
