"""Markdown rendering for the combined run report."""

from __future__ import annotations

from typing import List, Sequence

from course_state import CourseState
from econta.core.changelog import ChangeLogEntry, render_change_log

from .results import HandlerResult, IntegratedResult, VerificationResult


def render_integrated_report(results: Sequence[HandlerResult], original_task: str, state: CourseState) -> str:
    lines: List[str] = [
        "# Task Results",
        "",
        f"**Original Task:** {original_task}",
        "",
        f"**Course:** {state.course_name} ({state.language})",
        "",
    ]
    for result in results:
        lines.extend([f"## {result.handler}", ""])
        if result.success:
            lines.extend([result.output, ""])
        else:
            lines.append("**Errors:**")
            lines.extend(f"- {error}" for error in result.errors or [])
            lines.append("")
    return "\n".join(lines) + "\n"


def render_final_report(
    integrated: IntegratedResult,
    verification: VerificationResult,
    change_log: Sequence[ChangeLogEntry],
) -> str:
    lines: List[str] = [integrated.report.rstrip("\n"), "", "## Verification", ""]
    lines.append(f"**Status:** {'✓ PASSED' if verification.passed else '✗ FAILED'}")
    lines.append("")
    if verification.issues:
        lines.append("**Issues:**")
        lines.extend(f"- {issue}" for issue in verification.issues)
        lines.append("")
    if verification.warnings:
        lines.append("**Warnings:**")
        lines.extend(f"- {warning}" for warning in verification.warnings)
        lines.append("")

    lines.extend(["## Files Generated", ""])
    if integrated.files:
        lines.extend(f"- {file}" for file in integrated.files)
    else:
        lines.append("*No files generated*")
    lines.extend(["", "## Change Log", "", render_change_log(change_log)])
    return "\n".join(lines)


__all__ = ["render_final_report", "render_integrated_report"]
