"""JSON document store for the course state."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from econta.core.config import Language

from .state import CourseState

LOGGER = logging.getLogger(__name__)


class CourseStateLoadError(RuntimeError):
    """Raised when a state document is missing or cannot be parsed."""


class CourseStateStore:
    """Whole-document load/save of a :class:`CourseState`."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> CourseState:
        if not self.exists():
            raise CourseStateLoadError(f"Course state not found at {self.path}")
        try:
            return CourseState.from_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, TypeError, ValidationError) as exc:
            raise CourseStateLoadError(f"Could not read course state at {self.path}: {exc}") from exc

    def save(self, state: CourseState) -> Path:
        """Write the document, creating the parent directory if needed."""

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(state.to_json() + "\n", encoding="utf-8")
        return self.path

    def load_or_create(self, course_name: str, language: Language = "en") -> CourseState:
        """Load the document, falling back to a fresh state when it is missing or corrupt."""

        try:
            state = self.load()
        except CourseStateLoadError as exc:
            LOGGER.warning("Could not load state file, creating new state: %s", exc)
            return CourseState(course_name=course_name, language=language)
        LOGGER.info("Loaded course state from %s", self.path)
        return state


__all__ = ["CourseStateLoadError", "CourseStateStore"]
