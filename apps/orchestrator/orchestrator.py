"""Course orchestrator: plan -> delegate -> integrate -> verify."""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import Dict, List, Sequence

import anyio
import anyio.to_thread

from apps.tools.filesystem import SandboxedFileSystem, SandboxViolation
from course_state import CourseState, LectureMetadata
from econta.core.changelog import ChangeLog
from econta.core.classifier import (
    CATEGORY_HANDLERS,
    TaskCategory,
    classify_task,
    matching_categories,
)
from econta.core.config import OrchestratorConfig
from econta.utils.text import extract_lecture_number, truncate

from .registry import HandlerRegistry
from .report import render_final_report, render_integrated_report
from .results import (
    HandlerResult,
    IntegratedResult,
    NotationDeclaration,
    OrchestratorRun,
    TaskPlan,
    VerificationResult,
)
from .ta_roles.base import TaskHandler

LOGGER_NAME = "econta.orchestrator"
NO_FILES_WARNING = "No files were generated"
NOTATION_LINE = re.compile(r"^\s*%+\s*notation:\s*(?P<symbol>[^=\n]+?)\s*=\s*(?P<meaning>[^\n]+?)\s*$", re.IGNORECASE | re.MULTILINE)


class CourseOrchestrator:
    """Route a request to TA handlers and check the shared course state afterwards.

    One instance owns one course state and one change log for a single
    invocation. Handlers never write the state; :meth:`verify` folds their
    extracted notation back in before running the consistency checks.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        fs: SandboxedFileSystem,
        course_state: CourseState,
        *,
        config: OrchestratorConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry
        self.fs = fs
        self.course_state = course_state
        self.config = config or OrchestratorConfig()
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.change_log = ChangeLog()
        self.last_verification = VerificationResult()

    def run(self, task: str, context: str | None = None) -> OrchestratorRun:
        self.logger.info("Starting task for %s (%s): %s", self.course_state.course_name, self.course_state.language, task)

        plan = self.plan(classify_task(task), task)
        self.logger.info("[PLAN] task type %s, handlers %s", plan.task_type.value, ", ".join(h.value for h in plan.handlers))

        results = self.delegate(plan, task, context)
        integrated = self.integrate(results, task)
        verification = self.verify(integrated)
        report = render_final_report(integrated, verification, self.change_log.entries)

        return OrchestratorRun(
            success=verification.passed,
            report=report,
            plan=plan,
            files=list(integrated.files),
            verification=verification,
            change_log=list(self.change_log.entries),
        )

    # ------------------------------------------------------------------
    # PLAN

    def plan(self, task_type: TaskCategory, task: str) -> TaskPlan:
        if task_type is not TaskCategory.MIXED:
            return TaskPlan(task_type=task_type, handlers=(CATEGORY_HANDLERS[task_type],), parallel=False)

        handlers = [CATEGORY_HANDLERS[category] for category in matching_categories(task)]
        if not handlers:
            handlers = list(self.config.mixed_fallback)
            self.logger.info(
                "[PLAN] no keyword family matched; using mixed fallback %s",
                ", ".join(h.value for h in handlers),
            )
        return TaskPlan(task_type=task_type, handlers=tuple(handlers), parallel=len(handlers) > 1)

    # ------------------------------------------------------------------
    # DELEGATE

    def delegate(self, plan: TaskPlan, task: str, context: str | None = None) -> List[HandlerResult]:
        mode = "in parallel" if plan.parallel else "sequentially"
        self.logger.info("[DELEGATE] executing %d handler(s) %s", len(plan.handlers), mode)
        # Unknown names raise KeyError here, before any handler runs.
        handlers = [self.registry.get(name) for name in plan.handlers]
        if plan.parallel:
            return anyio.run(self._delegate_parallel, handlers, task, context)

        results: List[HandlerResult] = []
        for handler in handlers:
            result = self._invoke_handler(handler, task, context)
            self._record_result(result, task)
            results.append(result)
        return results

    async def _delegate_parallel(
        self, handlers: Sequence[TaskHandler], task: str, context: str | None
    ) -> List[HandlerResult]:
        slots: Dict[int, HandlerResult] = {}

        async def _run(index: int, handler: TaskHandler) -> None:
            result = await anyio.to_thread.run_sync(partial(self._invoke_handler, handler, task, context))
            slots[index] = result
            self._record_result(result, task)

        async with anyio.create_task_group() as group:
            for index, handler in enumerate(handlers):
                group.start_soon(_run, index, handler)

        return [slots[index] for index in range(len(handlers))]

    def _invoke_handler(self, handler: TaskHandler, task: str, context: str | None) -> HandlerResult:
        name = handler.name
        self.logger.info("[%s] starting", name)
        try:
            return handler.execute(task, context)
        except Exception as exc:  # noqa: BLE001 - a handler crash must not cancel its siblings
            self.logger.exception("[%s] crashed", name)
            return HandlerResult.failed(name, f"{type(exc).__name__}: {exc}")

    def _record_result(self, result: HandlerResult, task: str) -> None:
        if not result.success:
            self.logger.warning("[%s] failed: %s", result.handler, ", ".join(result.errors or []))
            return
        self.logger.info("[%s] completed (%d file(s))", result.handler, len(result.files))
        if result.files:
            self.change_log.record(
                result.handler,
                "execute",
                result.files,
                f"Completed task: {truncate(task, self.config.description_limit)}",
            )

    # ------------------------------------------------------------------
    # INTEGRATE

    def integrate(self, results: Sequence[HandlerResult], original_task: str) -> IntegratedResult:
        self.logger.info("[INTEGRATE] combining %d result(s)", len(results))
        files: List[str] = []
        notation: List[NotationDeclaration] = []
        for result in results:
            if result.success:
                files.extend(result.files)
                notation.extend(extract_notation(result.output, source=result.handler))
        return IntegratedResult(
            report=render_integrated_report(results, original_task, self.course_state),
            files=files,
            notation=notation,
            lecture_number=extract_lecture_number(original_task),
        )

    # ------------------------------------------------------------------
    # VERIFY

    def verify(self, integrated: IntegratedResult) -> VerificationResult:
        self.logger.info("[VERIFY] running verification checks")
        self._fold_into_state(integrated)

        issues: List[str] = []
        warnings: List[str] = []

        consistent, conflicts = self.course_state.verify_notation_consistency()
        if not consistent:
            issues.extend(conflicts)

        if not integrated.files:
            warnings.append(NO_FILES_WARNING)
        for file in integrated.files:
            try:
                exists = self.fs.exists(file)
            except SandboxViolation:
                issues.append(f"File outside sandbox: {file}")
                continue
            if not exists:
                issues.append(f"File not found: {file}")

        verification = VerificationResult(passed=not issues, issues=issues, warnings=warnings)
        self.logger.info("[VERIFY] %s (%d issue(s), %d warning(s))", "PASSED" if verification.passed else "FAILED", len(issues), len(warnings))
        for issue in issues:
            self.logger.warning("[VERIFY] issue: %s", issue)
        self.last_verification = verification
        return verification

    def _fold_into_state(self, integrated: IntegratedResult) -> None:
        lecture_number = integrated.lecture_number
        if lecture_number is None:
            if integrated.notation:
                self.logger.info("Skipping %d notation declaration(s): task names no lecture", len(integrated.notation))
            return

        for declaration in integrated.notation:
            self.course_state.register_notation(
                declaration.symbol,
                declaration.meaning,
                lecture_number,
                context=f"declared by {declaration.source}",
            )

        if not integrated.files and not integrated.notation:
            return
        current = self.course_state.get_lecture(lecture_number) or LectureMetadata(
            number=lecture_number, title=f"Lecture {lecture_number}"
        )
        self.course_state.update_lecture(
            current.model_copy(
                update={
                    "files": list(dict.fromkeys([*current.files, *integrated.files])),
                    "notation_introduced": list(
                        dict.fromkeys([*current.notation_introduced, *(d.symbol for d in integrated.notation)])
                    ),
                }
            )
        )


def extract_notation(output: str, *, source: str) -> List[NotationDeclaration]:
    """Collect ``% notation: symbol = meaning`` declarations from handler output."""

    declarations: List[NotationDeclaration] = []
    for match in NOTATION_LINE.finditer(output):
        symbol = match.group("symbol").strip().strip("$").strip()
        meaning = match.group("meaning").strip()
        if symbol and meaning:
            declarations.append(NotationDeclaration(symbol=symbol, meaning=meaning, source=source))
    return declarations


__all__ = ["CourseOrchestrator", "LOGGER_NAME", "NO_FILES_WARNING", "extract_notation"]
