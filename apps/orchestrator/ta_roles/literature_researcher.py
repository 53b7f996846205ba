"""TA role for literature research and BibTeX citations."""

from __future__ import annotations

from typing import List

from econta.core.classifier import HandlerName
from econta.utils.text import sanitize_filename

from .base import TaskHandler, iter_code_blocks

RESEARCH_INSTRUCTIONS = """Please provide:
1. A concise research summary covering:
   - Key theoretical frameworks
   - Important empirical findings
   - Recent developments
   - Recommended readings (5-10 papers)

2. Complete BibTeX entries for all cited works

3. Categorization:
   - Foundational/classic papers
   - Recent research
   - Empirical studies
   - Theoretical contributions

Format the response with:
- Markdown summary with sections
- BibTeX code block with all citations
- Reading list ordered by priority"""


class LiteratureResearcher(TaskHandler):
    handler_name = HandlerName.RESEARCH

    def build_prompt(self, task: str, context: str | None) -> str:
        lines = self._prompt_header(task, context)
        lines.append(RESEARCH_INSTRUCTIONS)
        return "\n".join(lines)

    def save_files(self, response: str, task: str) -> List[str]:
        topic = sanitize_filename(task[: self.filename_prefix_limit]) or "topic"
        saved: List[str] = []

        bibtex = next(iter_code_blocks(response, ("bibtex", "bib")), None)
        if bibtex is not None:
            bib_file = f"research_{topic}.bib"
            if self._write(bib_file, bibtex.content):
                saved.append(bib_file)

        summary_file = f"research_{topic}.md"
        if self._write(summary_file, response):
            saved.append(summary_file)
        return saved
