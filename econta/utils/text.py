"""Text helpers for lecture references, filenames and the en/de glossary."""

from __future__ import annotations

import re
from typing import List, Tuple

_LECTURE_PATTERN = re.compile(r"lecture[_-]?\s?(\d+)|(\d+)[_-]?lecture", re.IGNORECASE)

GERMAN_GLOSSARY = {
    "supply": "Angebot",
    "demand": "Nachfrage",
    "price": "Preis",
    "quantity": "Menge",
    "market": "Markt",
    "equilibrium": "Gleichgewicht",
    "lecture": "Vorlesung",
    "problem set": "Übungsblatt",
    "solution": "Lösung",
    "exercise": "Übung",
    "assignment": "Aufgabe",
    "elasticity": "Elastizität",
    "utility": "Nutzen",
    "profit": "Gewinn",
    "cost": "Kosten",
    "revenue": "Erlös",
    "consumer": "Konsument",
    "producer": "Produzent",
}


def extract_lecture_number(text: str) -> int | None:
    """Return the lecture number referenced in a path or task (``lecture_3``, ``lecture 3``, ``3-lecture``)."""

    match = _LECTURE_PATTERN.search(text or "")
    if not match:
        return None
    return int(match.group(1) or match.group(2))


def sanitize_filename(title: str) -> str:
    """Lowercase ``title`` and collapse everything outside ``[a-z0-9_-]`` into single underscores."""

    name = re.sub(r"[^a-z0-9_-]+", "_", title.lower())
    name = re.sub(r"_{2,}", "_", name)
    return name.strip("_-")


def truncate(text: str, limit: int, *, suffix: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def glossary_terms(text: str) -> List[Tuple[str, str]]:
    """Return the (English, German) glossary pairs whose English term appears in ``text``."""

    pairs: List[Tuple[str, str]] = []
    for english, german in GERMAN_GLOSSARY.items():
        if re.search(rf"\b{re.escape(english)}\b", text, re.IGNORECASE):
            pairs.append((english, german))
    return pairs


__all__ = [
    "GERMAN_GLOSSARY",
    "extract_lecture_number",
    "glossary_terms",
    "sanitize_filename",
    "truncate",
]
