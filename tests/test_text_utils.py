import pytest

from econta.utils.text import extract_lecture_number, glossary_terms, sanitize_filename, truncate


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("lecture_3.tex", 3),
        ("Fix lecture 3 slides", 3),
        ("Lecture-12 notes", 12),
        ("slides/4_lecture.tex", 4),
        ("no number here", None),
        ("", None),
    ],
)
def test_extract_lecture_number(text: str, expected: int | None) -> None:
    assert extract_lecture_number(text) == expected


def test_sanitize_filename_collapses_separators() -> None:
    assert sanitize_filename("Intro to Micro: Supply & Demand!") == "intro_to_micro_supply_demand"
    assert sanitize_filename("   ") == ""


def test_truncate_appends_suffix_only_when_needed() -> None:
    assert truncate("short", 60) == "short"
    assert truncate("x" * 61, 60) == "x" * 60 + "..."


def test_glossary_terms_match_whole_words() -> None:
    pairs = glossary_terms("Create a problem set on supply and demand")
    assert ("supply", "Angebot") in pairs
    assert ("demand", "Nachfrage") in pairs
    assert ("problem set", "Übungsblatt") in pairs
    assert glossary_terms("suppliers") == []
