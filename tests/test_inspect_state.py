import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import scripts.inspect_state as inspect_state
from course_state import CourseState, CourseStateStore, LectureMetadata


def _write_state(tmp_path: Path, *, conflicting: bool = False) -> Path:
    state = CourseState(course_name="Intermediate Micro")
    state.register_notation("Q", "quantity", 1)
    state.register_notation("p", "price", 2)
    if conflicting:
        state.register_notation("Q", "quality", 3)
    state.register_assumption("Price-taking firms", introduced_in=1, valid_from=1, valid_to=2)
    state.update_lecture(LectureMetadata(number=1, title="Markets", objectives=["define demand"]))
    state.update_lecture(LectureMetadata(number=2, title="Elasticity", files=["lecture2.tex"]))
    path = tmp_path / "state.json"
    CourseStateStore(path).save(state)
    return path


def test_summary_json(tmp_path: Path) -> None:
    path = _write_state(tmp_path)

    result = CliRunner().invoke(inspect_state.app, ["summary", "--state", str(path), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["course"] == "Intermediate Micro"
    assert payload["counts"]["notation_symbols"] == 2
    assert payload["counts"]["lectures"] == 2
    assert payload["consistent"] is True


def test_notation_filters(tmp_path: Path) -> None:
    path = _write_state(tmp_path, conflicting=True)

    assert [row["symbol"] for row in inspect_state.query_notation(path, lecture=1)] == ["Q"]
    history = inspect_state.query_notation(path, symbol="Q")
    assert [row["meaning"] for row in history] == ["quantity", "quality"]


def test_lectures_include_prerequisites(tmp_path: Path) -> None:
    rows = inspect_state.query_lectures(_write_state(tmp_path))

    assert [row["number"] for row in rows] == [1, 2]
    assert rows[1]["prerequisites"] == ["define demand"]
    assert rows[1]["files"] == ["lecture2.tex"]


def test_assumptions_active_in_lecture(tmp_path: Path) -> None:
    path = _write_state(tmp_path)

    assert len(inspect_state.query_assumptions(path, lecture=2)) == 1
    assert inspect_state.query_assumptions(path, lecture=3) == []


def test_table_output_renders(tmp_path: Path) -> None:
    path = _write_state(tmp_path)

    result = CliRunner().invoke(inspect_state.app, ["notation", "--state", str(path)])

    assert result.exit_code == 0
    assert "quantity" in result.stdout


def test_check_exits_non_zero_on_conflict(tmp_path: Path) -> None:
    path = _write_state(tmp_path, conflicting=True)

    result = CliRunner().invoke(inspect_state.app, ["check", "--state", str(path), "--json"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["conflicts"] == ['Symbol "Q" has conflicting meanings: quantity, quality']


def test_missing_state_is_a_bad_parameter(tmp_path: Path) -> None:
    result = CliRunner().invoke(inspect_state.app, ["summary", "--state", str(tmp_path / "absent.json")])

    assert result.exit_code != 0


def test_env_var_sets_default_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_state(tmp_path)
    monkeypatch.setenv("ECONTA_STATE", str(path))

    assert inspect_state.query_summary()["course"] == "Intermediate Micro"
