"""TA role for writing problem sets and their solutions."""

from __future__ import annotations

from typing import List

from econta.core.classifier import HandlerName
from econta.utils.text import extract_lecture_number, sanitize_filename

from .base import TaskHandler, iter_code_blocks

PROBLEMSET_INSTRUCTIONS = """Please create a problem set with:
- 4-6 problems covering the key concepts
- Mix of difficulty levels (label as: Basic, Intermediate, Advanced)
- Both computational and conceptual questions
- Clear problem statements with all necessary information

Provide:
1. Problem set document (problems only)
2. Solutions document (with detailed step-by-step solutions)

Format each in a LaTeX code block with its filename."""


class ProblemSetAuthor(TaskHandler):
    """Ground problems in the lecture's objectives, prerequisites, notation and assumptions."""

    handler_name = HandlerName.PROBLEMSET

    def build_prompt(self, task: str, context: str | None) -> str:
        lines = self._prompt_header(task, context)
        lecture_number = extract_lecture_number(task)
        if lecture_number:
            lines.extend(self._lecture_context(lecture_number))
        lines.append(PROBLEMSET_INSTRUCTIONS)
        return "\n".join(lines)

    def _lecture_context(self, lecture_number: int) -> List[str]:
        state = self.course_state
        lines: List[str] = []

        lecture = state.get_lecture(lecture_number)
        if lecture:
            lines.append(f"Lecture {lecture_number}: {lecture.title}")
            lines.append("Learning objectives:")
            lines.extend(f"  - {objective}" for objective in lecture.objectives)
            lines.append("")

        prereqs = state.prerequisites_for(lecture_number)
        if prereqs:
            lines.append("Prerequisites (from earlier lectures):")
            lines.extend(f"  - {prereq}" for prereq in prereqs)
            lines.append("")

        notation = state.notation_up_to_lecture(lecture_number)
        if notation:
            lines.append("Available notation:")
            lines.extend(f"  {entry.symbol}: {entry.meaning}" for entry in notation)
            lines.append("")

        assumptions = state.active_assumptions(lecture_number)
        if assumptions:
            lines.append("Standing assumptions:")
            lines.extend(f"  - {assumption.description}" for assumption in assumptions)
            lines.append("")
        return lines

    def save_files(self, response: str, task: str) -> List[str]:
        problems: str | None = None
        solutions: str | None = None
        for block in iter_code_blocks(response, ("latex", "tex", "markdown", "")):
            label = (block.label or "").lower()
            body = block.content.lower()
            is_problems = "problem set" in body or "problem" in label
            is_solutions = "solution" in body or "solution" in label
            if is_problems and problems is None:
                problems = block.content
            elif is_solutions and solutions is None:
                solutions = block.content

        lecture_number = extract_lecture_number(task)
        lecture_prefix = f"lecture{lecture_number}_" if lecture_number else ""
        base_name = sanitize_filename(self.course_state.course_name or "course") or "course"

        saved: List[str] = []
        for kind, content in (("problemset", problems), ("solutions", solutions)):
            if content is None:
                continue
            filename = f"{lecture_prefix}{kind}_{base_name}.tex"
            if self._write(filename, content):
                saved.append(filename)
        return saved
