import logging
from pathlib import Path

import pytest

from course_state import CourseState, CourseStateLoadError, CourseStateStore


def test_save_creates_parent_and_load_round_trips(tmp_path: Path) -> None:
    store = CourseStateStore(tmp_path / "nested" / "state.json")
    state = CourseState(course_name="Micro", language="de")
    state.register_notation("p", "price", 1)

    written = store.save(state)

    assert written.exists()
    assert store.load() == state


def test_load_missing_document_raises(tmp_path: Path) -> None:
    with pytest.raises(CourseStateLoadError):
        CourseStateStore(tmp_path / "missing.json").load()


def test_load_or_create_falls_back_on_corrupt_document(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="course_state.storage"):
        state = CourseStateStore(path).load_or_create("Fallback Course", "de")

    assert state.course_name == "Fallback Course"
    assert state.language == "de"
    assert state.notation_log == []
    assert "creating new state" in caplog.text


def test_load_or_create_falls_back_on_invalid_document(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text('{"courseName": "X", "language": "fr"}', encoding="utf-8")

    state = CourseStateStore(path).load_or_create("Default")

    assert state.course_name == "Default"
    assert state.language == "en"


def test_load_or_create_prefers_existing_document(tmp_path: Path) -> None:
    store = CourseStateStore(tmp_path / "state.json")
    store.save(CourseState(course_name="Stored"))

    assert store.load_or_create("Ignored").course_name == "Stored"


@pytest.mark.parametrize(
    "payload",
    [
        b'{"courseName": "X", "lectures": [5]}',
        b'{"courseName": "X", "lectures": [null]}',
        b'{"courseName": "X", "lectures": [[1, {"number": 1, "title": "L1"}, "extra"]]}',
        b'{"courseName": "X", "lectures": [[null, {"number": 1, "title": "L1"}]]}',
        b"\xff\xfe not utf-8",
    ],
)
def test_load_or_create_falls_back_on_malformed_payload(tmp_path: Path, payload: bytes) -> None:
    path = tmp_path / "state.json"
    path.write_bytes(payload)

    with pytest.raises(CourseStateLoadError):
        CourseStateStore(path).load()
    state = CourseStateStore(path).load_or_create("Fallback")

    assert state.course_name == "Fallback"
    assert state.lectures == {}
