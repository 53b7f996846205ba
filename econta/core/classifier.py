"""Keyword-based task classification for incoming teaching-assistant requests."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class TaskCategory(str, Enum):
    """Routing labels produced by :func:`classify_task`."""

    LATEX = "latex"
    PROBLEMSET = "problemset"
    RESEARCH = "research"
    RCODE = "rcode"
    MIXED = "mixed"


class HandlerName(str, Enum):
    """The closed set of task handlers the orchestrator can delegate to."""

    LATEX = "LatexTA"
    PROBLEMSET = "ProblemSetTA"
    RESEARCH = "ResearchTA"
    RCODE = "RCodeTA"

    @classmethod
    def choices(cls) -> List[str]:
        return [member.value for member in cls]


CATEGORY_KEYWORDS: Dict[TaskCategory, Tuple[str, ...]] = {
    TaskCategory.LATEX: ("latex", "slides", "beamer", "compile", "tex", "macro", "polish"),
    TaskCategory.PROBLEMSET: ("problem", "exercise", "solution", "homework", "assignment", "quiz"),
    TaskCategory.RESEARCH: ("research", "literature", "citation", "bibtex", "paper", "reference", "background"),
    TaskCategory.RCODE: ("r code", "r script", "rstudio", "analysis", "data", "plot", "simulation"),
}

CATEGORY_HANDLERS: Dict[TaskCategory, HandlerName] = {
    TaskCategory.LATEX: HandlerName.LATEX,
    TaskCategory.PROBLEMSET: HandlerName.PROBLEMSET,
    TaskCategory.RESEARCH: HandlerName.RESEARCH,
    TaskCategory.RCODE: HandlerName.RCODE,
}


def matching_categories(text: str) -> List[TaskCategory]:
    """Return every keyword family with at least one hit in ``text``, in family order."""

    lowered = (text or "").lower()
    return [
        category
        for category, keywords in CATEGORY_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    ]


def classify_task(text: str) -> TaskCategory:
    """
    Map a free-text request onto a single task category.

    Exactly one matching keyword family wins. No match and several matches
    both yield ``TaskCategory.MIXED``; callers treat that as "needs a wider
    plan", never as a failure.
    """

    matches = matching_categories(text)
    if len(matches) == 1:
        return matches[0]
    return TaskCategory.MIXED


__all__ = [
    "CATEGORY_HANDLERS",
    "CATEGORY_KEYWORDS",
    "HandlerName",
    "TaskCategory",
    "classify_task",
    "matching_categories",
]
