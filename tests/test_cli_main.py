import json
from pathlib import Path
from unittest import mock

import pytest

from econta.cli import main as cli
from econta.core.classifier import HandlerName
from tests.mocks.model_backend import ScriptedGenerator, latex_reply


@pytest.fixture()
def scripted(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> ScriptedGenerator:
    monkeypatch.chdir(tmp_path)
    generator = ScriptedGenerator({HandlerName.LATEX: latex_reply(1)})
    with mock.patch("econta.pipeline.bootstrap.configure_text_generator", return_value=generator):
        yield generator


def test_run_exits_zero_and_prints_report(scripted: ScriptedGenerator, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    materials = tmp_path / "materials"

    exit_code = cli.main(["run", "--task", "Polish lecture 1 slides", "--course", "Micro", "--path", str(materials)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "# Task Results" in out
    assert "**Course:** Micro (en)" in out
    assert (materials / "lecture1.tex").is_file()
    assert (materials / "course_state.json").is_file()


def test_run_exits_one_when_verification_fails(scripted: ScriptedGenerator, tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"
    state_path.write_text(
        json.dumps(
            {
                "courseName": "Micro",
                "notationRegistry": [{"symbol": "Q", "meaning": "quality", "introducedIn": 1}],
            }
        ),
        encoding="utf-8",
    )
    output = tmp_path / "out" / "report.md"

    exit_code = cli.main(
        ["run", "-t", "Polish lecture 1 slides", "--state", str(state_path), "--output", str(output)]
    )

    assert exit_code == 1
    assert 'Symbol "Q" has conflicting meanings: quality, quantity' in output.read_text(encoding="utf-8")


def test_missing_config_is_a_usage_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", "--task", "x", "--config", str(tmp_path / "absent.yaml")])
    assert excinfo.value.code == 2


def test_model_configuration_failure_exits_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    with mock.patch("econta.pipeline.bootstrap.load_dotenv"), mock.patch.dict("os.environ", {}, clear=True):
        exit_code = cli.main(["run", "--task", "Polish slides"])

    assert exit_code == 1
    assert "Unable to configure the language model" in capsys.readouterr().err


def test_init_creates_state_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert cli.main(["init", "--course", "Makro", "--lang", "de", "--path", "materials"]) == 0

    document = json.loads((tmp_path / "materials" / "course_state.json").read_text(encoding="utf-8"))
    assert document["courseName"] == "Makro"
    assert document["language"] == "de"
    assert cli.main(["init", "--path", "materials"]) == 1
    assert cli.main(["init", "--path", "materials", "--force"]) == 0


def test_parser_rejects_unknown_language() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["run", "--task", "x", "--lang", "fr"])


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("econta ")
