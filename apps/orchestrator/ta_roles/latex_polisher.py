"""TA role for polishing LaTeX slides and documents."""

from __future__ import annotations

import re
from typing import List

from econta.core.classifier import HandlerName

from .base import TaskHandler, iter_code_blocks

FILE_REFERENCE = re.compile(r"(?:file|lecture|slides?):\s*([^\s,]+)", re.IGNORECASE)


class LatexPolisher(TaskHandler):
    """Send slides plus the live notation registry to the model and save corrected files."""

    handler_name = HandlerName.LATEX

    def build_prompt(self, task: str, context: str | None) -> str:
        lines = self._prompt_header(task, context)

        registry = self.course_state.notation_registry
        if registry:
            lines.append(f"Notation registry ({len(registry)} entries):")
            lines.extend(
                f"  {entry.symbol}: {entry.meaning} (introduced in lecture {entry.introduced_in})" for entry in registry
            )
        else:
            lines.append("No notation registry available yet.")
        lines.append("")

        match = FILE_REFERENCE.search(task)
        if match:
            lines.extend(self._read_for_prompt(match.group(1), "latex"))

        lines.append(
            "Please complete the task. If you need to modify files, provide the complete updated "
            "content in a clearly marked code block with the filename."
        )
        return "\n".join(lines)

    def save_files(self, response: str, task: str) -> List[str]:
        saved: List[str] = []
        for block in iter_code_blocks(response, ("latex", "tex")):
            if not block.label:
                continue
            if self._write(block.label, block.content):
                saved.append(block.label)
        return saved
