"""Shared plumbing for the model-backed TA handlers."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from agents.ta_roles import ROLES_BY_NAME, TARoleSpec
from apps.orchestrator.results import HandlerResult
from apps.tools.filesystem import SandboxedFileSystem, SandboxViolation
from course_state import CourseState
from econta.core.classifier import HandlerName
from econta.core.dspy_runtime import ModelError, TextGenerator
from econta.utils.text import glossary_terms

COLLABORATOR_ERRORS = (ModelError, SandboxViolation, OSError)


@dataclass(frozen=True)
class CodeBlock:
    language: str
    label: str | None
    content: str


def iter_code_blocks(response: str, languages: Iterable[str] | None = None) -> Iterator[CodeBlock]:
    """Yield fenced blocks such as ```latex:slides.tex or ```r script.R.

    ``languages`` limits the fence tags considered (case-insensitive); an
    untagged fence is reported with an empty language.
    """

    wanted = {lang.lower() for lang in languages} if languages is not None else None
    pattern = re.compile(r"```([A-Za-z]*)(?:[: ]+([^\n]*))?\n(.*?)```", re.DOTALL)
    for match in pattern.finditer(response):
        language = match.group(1).lower()
        if wanted is not None and language not in wanted:
            continue
        label = (match.group(2) or "").strip() or None
        yield CodeBlock(language=language, label=label, content=match.group(3))


class TaskHandler(ABC):
    """Common contract: ``execute(task, context) -> HandlerResult``.

    Handlers read the course state for prompt context but never write it;
    the orchestrator folds their results back in after verification.
    """

    handler_name: HandlerName

    def __init__(
        self,
        generator: TextGenerator,
        fs: SandboxedFileSystem,
        course_state: CourseState,
        *,
        role: TARoleSpec | None = None,
        filename_prefix_limit: int = 30,
        logger: logging.Logger | None = None,
    ) -> None:
        self.generator = generator
        self.fs = fs
        self.course_state = course_state
        self.role = role or ROLES_BY_NAME[self.handler_name]
        self.filename_prefix_limit = filename_prefix_limit
        self.logger = logger or logging.getLogger(f"econta.handlers.{self.handler_name.value}")

    @property
    def name(self) -> str:
        return self.handler_name.value

    def execute(self, task: str, context: str | None = None) -> HandlerResult:
        try:
            prompt = self.build_prompt(task, context)
            response = self.generator.generate(prompt, self.role.system_prompt)
            files = self.save_files(response, task)
        except COLLABORATOR_ERRORS as exc:
            self.logger.warning("%s failed: %s", self.name, exc)
            return HandlerResult.failed(self.name, str(exc))
        return HandlerResult.succeeded(self.name, response, files)

    @abstractmethod
    def build_prompt(self, task: str, context: str | None) -> str:
        ...

    @abstractmethod
    def save_files(self, response: str, task: str) -> List[str]:
        ...

    # ------------------------------------------------------------------

    def _prompt_header(self, task: str, context: str | None) -> List[str]:
        state = self.course_state
        lines = [f"Task: {task}", ""]
        if context:
            lines.extend([f"Additional context: {context}", ""])
        lines.append(f"Course: {state.course_name}")
        lines.append(f"Language: {state.language}")
        if state.language == "de":
            pairs = glossary_terms(f"{task} {context or ''}")
            if pairs:
                lines.append("Use these German terms: " + "; ".join(f"{en} -> {de}" for en, de in pairs))
        lines.append("")
        return lines

    def _read_for_prompt(self, file_path: str, fence: str) -> List[str]:
        try:
            content = self.fs.read(file_path)
        except (SandboxViolation, OSError) as exc:
            return [f"Note: Could not read file {file_path}: {exc}", ""]
        return [f"Current file content ({file_path}):", f"```{fence}", content.rstrip("\n"), "```", ""]

    def _write(self, file_path: str, content: str) -> bool:
        """Write one extracted file; failures are logged and skipped."""

        try:
            self.fs.write(file_path, content)
        except (SandboxViolation, OSError) as exc:
            self.logger.warning("%s failed to save %s: %s", self.name, file_path, exc)
            return False
        self.logger.info("%s saved %s", self.name, file_path)
        return True


__all__ = ["COLLABORATOR_ERRORS", "CodeBlock", "TaskHandler", "iter_code_blocks"]
