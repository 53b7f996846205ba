import pytest

from econta.core.classifier import (
    CATEGORY_HANDLERS,
    CATEGORY_KEYWORDS,
    HandlerName,
    TaskCategory,
    classify_task,
    matching_categories,
)

# "bibtex" also contains "tex", so it matches two families.
CROSS_FAMILY_KEYWORDS = {"bibtex"}


@pytest.mark.parametrize(
    ("category", "keyword"),
    [
        (category, keyword)
        for category, keywords in CATEGORY_KEYWORDS.items()
        for keyword in keywords
        if keyword not in CROSS_FAMILY_KEYWORDS
    ],
)
def test_each_keyword_routes_to_its_family(category: TaskCategory, keyword: str) -> None:
    assert classify_task(f"Please handle the {keyword} for week two") is category


def test_slides_request_is_latex() -> None:
    assert classify_task("Fix lecture 3 slides errors and unify notation") is TaskCategory.LATEX


def test_slides_and_homework_is_mixed() -> None:
    task = "Create lecture 5 slides and homework problems"
    assert classify_task(task) is TaskCategory.MIXED
    assert matching_categories(task) == [TaskCategory.LATEX, TaskCategory.PROBLEMSET]


def test_no_keyword_is_mixed() -> None:
    assert classify_task("Say hello to the class") is TaskCategory.MIXED
    assert matching_categories("Say hello to the class") == []


def test_empty_text_is_mixed() -> None:
    assert classify_task("") is TaskCategory.MIXED


def test_matching_is_case_insensitive() -> None:
    assert classify_task("POLISH THE BEAMER DECK") is TaskCategory.LATEX
    assert classify_task("Write an R Script for elasticities") is TaskCategory.RCODE


def test_bibtex_matches_latex_and_research() -> None:
    assert matching_categories("export bibtex") == [TaskCategory.LATEX, TaskCategory.RESEARCH]
    assert classify_task("export bibtex") is TaskCategory.MIXED


def test_classification_is_deterministic() -> None:
    task = "Find literature on minimum wages"
    assert {classify_task(task) for _ in range(5)} == {TaskCategory.RESEARCH}


def test_every_concrete_category_has_a_handler() -> None:
    concrete = [category for category in TaskCategory if category is not TaskCategory.MIXED]
    assert sorted(CATEGORY_HANDLERS) == sorted(concrete)
    assert set(CATEGORY_HANDLERS.values()) == set(HandlerName)
