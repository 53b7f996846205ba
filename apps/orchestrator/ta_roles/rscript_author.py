"""TA role for writing and debugging R scripts."""

from __future__ import annotations

import re
from datetime import date
from typing import List

from econta.core.classifier import HandlerName
from econta.utils.text import sanitize_filename

from .base import TaskHandler, iter_code_blocks

SCRIPT_REFERENCE = re.compile(r"(?:file|script):\s*([^\s,]+\.R)\b", re.IGNORECASE)

RSCRIPT_INSTRUCTIONS = """Requirements:
- Write clean, well-commented R code
- Use minimal dependencies (prefer base R)
- Include example usage
- Add error handling
- Make it educational (students will read this)

Provide the R script in a code block with filename."""


def add_documentation(script: str, task: str, course_name: str) -> str:
    """Prepend a roxygen-style header unless the script already carries one."""

    if "#'" in script:
        return script
    header = [
        f"#' {task.strip()}",
        "#'",
        f"#' Course: {course_name}",
        f"#' Generated: {date.today().isoformat()}",
        "",
    ]
    return "\n".join(header) + script


class RScriptAuthor(TaskHandler):
    handler_name = HandlerName.RCODE

    def build_prompt(self, task: str, context: str | None) -> str:
        lines = self._prompt_header(task, context)
        match = SCRIPT_REFERENCE.search(task)
        if match:
            lines.extend(self._read_for_prompt(match.group(1), "r"))
        lines.append(RSCRIPT_INSTRUCTIONS)
        return "\n".join(lines)

    def save_files(self, response: str, task: str) -> List[str]:
        topic = sanitize_filename(task[: self.filename_prefix_limit]) or "topic"
        saved: List[str] = []
        for index, block in enumerate(iter_code_blocks(response, ("r",)), start=1):
            filename = block.label
            if not filename or not filename.endswith(".R"):
                filename = f"script_{topic}_{index}.R"
            documented = add_documentation(block.content, task, self.course_state.course_name)
            if self._write(filename, documented):
                saved.append(filename)
        return saved
