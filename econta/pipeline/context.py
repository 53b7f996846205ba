"""Shared context objects for a teaching-assistant run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from apps.tools.filesystem import SandboxedFileSystem
from course_state import CourseState, CourseStateStore
from econta.core.config import TAConfig
from econta.core.dspy_runtime import TextGenerator


class TAPaths(BaseModel):
    """Canonical locations used during a run."""

    working_dir: Path
    materials_dir: Path
    state_path: Optional[Path] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("working_dir", "materials_dir", "state_path", mode="before")
    @classmethod
    def _expand(cls, value: Path | str | None) -> Path | None:
        if value is None:
            return None
        return Path(value).expanduser().resolve()

    def ensure_directories(self) -> None:
        """Create the materials directory if it does not yet exist."""
        self.materials_dir.mkdir(parents=True, exist_ok=True)


class TAContext(BaseModel):
    """Aggregated runtime context for orchestrator execution."""

    config: TAConfig
    paths: TAPaths
    fs: SandboxedFileSystem
    state: CourseState
    store: Optional[CourseStateStore] = None
    generator: TextGenerator

    model_config = ConfigDict(arbitrary_types_allowed=True)
