"""Registry that maps handler names onto concrete TA handler instances."""

from __future__ import annotations

from typing import Dict, List, Mapping

from apps.orchestrator.ta_roles.base import TaskHandler
from apps.orchestrator.ta_roles.latex_polisher import LatexPolisher
from apps.orchestrator.ta_roles.literature_researcher import LiteratureResearcher
from apps.orchestrator.ta_roles.problem_set_author import ProblemSetAuthor
from apps.orchestrator.ta_roles.rscript_author import RScriptAuthor
from apps.tools.filesystem import SandboxedFileSystem
from course_state import CourseState
from econta.core.classifier import HandlerName
from econta.core.dspy_runtime import TextGenerator

HANDLER_CLASSES: Dict[HandlerName, type[TaskHandler]] = {
    HandlerName.LATEX: LatexPolisher,
    HandlerName.PROBLEMSET: ProblemSetAuthor,
    HandlerName.RESEARCH: LiteratureResearcher,
    HandlerName.RCODE: RScriptAuthor,
}


class HandlerRegistry:
    """Simple, explicit lookup table over the closed handler set."""

    def __init__(self) -> None:
        self._handlers: Dict[HandlerName, TaskHandler] = {}

    def register(self, handler: TaskHandler) -> None:
        name = HandlerName(handler.handler_name)
        if name in self._handlers:
            raise ValueError(f"Handler {name.value} already registered")
        self._handlers[name] = handler

    def get(self, name: HandlerName | str) -> TaskHandler:
        try:
            return self._handlers[HandlerName(name)]
        except ValueError as exc:
            raise KeyError(f"Unknown handler: {name}") from exc
        except KeyError:
            raise KeyError(f"Handler {HandlerName(name).value} is not registered") from None

    def names(self) -> List[HandlerName]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        try:
            return HandlerName(name) in self._handlers
        except ValueError:
            return False

    def describe(self) -> Mapping[str, str]:
        return {name.value: handler.role.mandate for name, handler in self._handlers.items()}


def build_default_registry(
    generator: TextGenerator,
    fs: SandboxedFileSystem,
    course_state: CourseState,
    *,
    filename_prefix_limit: int = 30,
) -> HandlerRegistry:
    """Wire all four handlers against the shared collaborators."""

    registry = HandlerRegistry()
    for handler_cls in HANDLER_CLASSES.values():
        registry.register(
            handler_cls(generator, fs, course_state, filename_prefix_limit=filename_prefix_limit)
        )
    return registry


__all__ = ["HANDLER_CLASSES", "HandlerRegistry", "build_default_registry"]
