"""
Typed configuration helpers for the teaching-assistant pipeline.

Every section is optional so a bare ``econta run`` works without a config
file; CLI flags are layered on top by the bootstrap step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .classifier import HandlerName

DEFAULT_MODEL = "anthropic/claude-3-5-sonnet-20241022"
DEFAULT_MAX_TOKENS = 4096

Language = Literal["en", "de"]


class ModelConfig(BaseModel):
    """Provider settings for the generative-model backend shared by every handler."""

    model_config = ConfigDict(extra="allow")

    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=64)
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    api_key_env: str | None = None
    api_base: str | None = None
    api_base_env: str | None = None

    @property
    def provider(self) -> str:
        """Provider prefix of a litellm-style model id (``anthropic/claude-...`` -> ``anthropic``)."""
        if "/" in self.model:
            return self.model.split("/", 1)[0].strip().lower()
        return "anthropic"

    @property
    def extra_kwargs(self) -> Dict[str, Any]:
        return getattr(self, "model_extra", {}) or {}


class CourseDefaults(BaseModel):
    """Fallback course identity used when no state document is loaded."""

    name: str = "Economics Course"
    language: Language = "en"
    materials_path: Path = Field(default=Path("course_materials"))
    state_path: Optional[Path] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class OrchestratorConfig(BaseModel):
    """Routing policy knobs for the plan and delegate steps."""

    mixed_fallback: List[HandlerName] = Field(
        default_factory=lambda: [HandlerName.PROBLEMSET, HandlerName.LATEX],
        description="Handlers planned for a mixed task whose text matches no keyword family.",
    )
    description_limit: int = Field(default=60, ge=10)
    filename_prefix_limit: int = Field(default=30, ge=5)

    @field_validator("mixed_fallback")
    @classmethod
    def require_distinct_handlers(cls, value: List[HandlerName]) -> List[HandlerName]:
        if not value:
            raise ValueError("mixed_fallback must name at least one handler")
        if len(set(value)) != len(value):
            raise ValueError("mixed_fallback must not repeat handlers")
        return value


class TAConfig(BaseModel):
    """Top-level configuration for a teaching-assistant run."""

    models: ModelConfig = Field(default_factory=ModelConfig)
    course: CourseDefaults = Field(default_factory=CourseDefaults)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)


def read_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, received {type(data)}")
    return data


def _resolve_config_path(value: Any, base_dir: Path) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    else:
        path = path.resolve()
    return str(path)


def _absolutize_course_paths(data: Dict[str, Any], base_dir: Path) -> None:
    course = data.get("course")
    if isinstance(course, dict):
        for key in ("materials_path", "state_path"):
            if course.get(key):
                course[key] = _resolve_config_path(course[key], base_dir)


def load_ta_config(path: Path | None = None, *, base_dir: Path | None = None) -> TAConfig:
    """Load the YAML config, or return defaults when ``path`` is None."""
    if path is None:
        return TAConfig()
    path = path.expanduser().resolve()
    data = read_yaml_file(path)
    _absolutize_course_paths(data, base_dir=(base_dir or path.parent).resolve())
    try:
        return TAConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid teaching-assistant config in {path}") from exc


__all__ = [
    "CourseDefaults",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_MODEL",
    "Language",
    "ModelConfig",
    "OrchestratorConfig",
    "TAConfig",
    "load_ta_config",
    "read_yaml_file",
]
