"""Bootstrap helpers for a teaching-assistant run."""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from apps.tools.filesystem import SandboxedFileSystem
from course_state import CourseStateStore
from econta.core.config import Language, TAConfig, load_ta_config
from econta.core.dspy_runtime import DSPyConfigurationError, configure_text_generator

from .context import TAContext, TAPaths

LOGGER = logging.getLogger(__name__)
DEFAULT_STATE_FILENAME = "course_state.json"


def _apply_overrides(
    config: TAConfig,
    *,
    course_name: str | None,
    language: Language | None,
    materials_path: Path | None,
    state_path: Path | None,
    model: str | None,
) -> TAConfig:
    course_updates = {}
    if course_name:
        course_updates["name"] = course_name
    if language:
        course_updates["language"] = language
    if materials_path is not None:
        course_updates["materials_path"] = materials_path
    if state_path is not None:
        course_updates["state_path"] = state_path
    if course_updates:
        config = config.model_copy(update={"course": config.course.model_copy(update=course_updates)})
    if model:
        config = config.model_copy(update={"models": config.models.model_copy(update={"model": model})})
    return config


def bootstrap_run(
    config_path: Path | None = None,
    *,
    working_dir: Path | None = None,
    course_name: str | None = None,
    language: Language | None = None,
    materials_path: Path | None = None,
    state_path: Path | None = None,
    model: str | None = None,
) -> TAContext:
    """
    Load environment, configuration and course state, and construct the run context.

    Parameters
    ----------
    config_path:
        Optional YAML config. Without one every section takes its defaults.
    working_dir:
        Directory that anchors ``.env`` and relative paths. Defaults to ``Path.cwd()``.
    state_path:
        Course state JSON. Defaults to ``course_state.json`` inside the materials directory.
    course_name, language, materials_path, model:
        CLI overrides layered on top of the config file.
    """

    working_dir = (working_dir or Path.cwd()).resolve()
    load_dotenv(working_dir / ".env")

    config = load_ta_config(config_path, base_dir=working_dir)
    config = _apply_overrides(
        config,
        course_name=course_name,
        language=language,
        materials_path=materials_path,
        state_path=state_path,
        model=model,
    )

    materials_dir = config.course.materials_path
    if not materials_dir.is_absolute():
        materials_dir = working_dir / materials_dir
    paths = TAPaths(
        working_dir=working_dir,
        materials_dir=materials_dir,
        state_path=config.course.state_path or materials_dir / DEFAULT_STATE_FILENAME,
    )
    paths.ensure_directories()

    store = CourseStateStore(paths.state_path)
    state = store.load_or_create(config.course.name, config.course.language)

    try:
        generator = configure_text_generator(config.models)
    except DSPyConfigurationError as exc:
        raise RuntimeError("Unable to configure the language model") from exc
    LOGGER.info("Language model configured: %s", config.models.model)

    return TAContext(
        config=config,
        paths=paths,
        fs=SandboxedFileSystem(paths.materials_dir),
        state=state,
        store=store,
        generator=generator,
    )


__all__ = ["DEFAULT_STATE_FILENAME", "bootstrap_run"]
