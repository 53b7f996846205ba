"""CLI helpers for inspecting a persisted course state."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from course_state import CourseState, CourseStateLoadError, CourseStateStore

STATE_ENV_VAR = "ECONTA_STATE"
DEFAULT_STATE = Path("course_materials") / "course_state.json"

app = typer.Typer(help="Inspect notation, assumptions, and lectures in a course state document.")
console = Console()


def _resolve_default_state() -> Path:
    env_state = os.environ.get(STATE_ENV_VAR)
    if env_state:
        return Path(env_state).expanduser().resolve()
    return DEFAULT_STATE.resolve()


def _load_state(path: Path | None) -> CourseState:
    resolved = path.expanduser().resolve() if path is not None else _resolve_default_state()
    try:
        return CourseStateStore(resolved).load()
    except CourseStateLoadError as exc:
        raise typer.BadParameter(str(exc)) from exc


def query_summary(state_path: Path | None = None) -> Dict[str, Any]:
    state = _load_state(state_path)
    consistent, conflicts = state.verify_notation_consistency()
    return {
        "course": state.course_name,
        "language": state.language,
        "counts": {
            "learning_objectives": len(state.learning_objectives),
            "notation_symbols": len(state.notation_registry),
            "notation_writes": len(state.notation_log),
            "assumptions": len(state.assumptions),
            "lectures": len(state.lectures),
        },
        "consistent": consistent,
        "conflicts": conflicts,
    }


def query_notation(
    state_path: Path | None = None,
    lecture: Optional[int] = None,
    symbol: Optional[str] = None,
) -> List[dict]:
    state = _load_state(state_path)
    if symbol:
        entries = state.notation_history(symbol)
    elif lecture is not None:
        entries = state.notation_up_to_lecture(lecture)
    else:
        entries = state.notation_registry
    return [entry.model_dump(mode="json", exclude_none=True) for entry in entries]


def query_assumptions(state_path: Path | None = None, lecture: Optional[int] = None) -> List[dict]:
    state = _load_state(state_path)
    assumptions = state.active_assumptions(lecture) if lecture is not None else state.assumptions
    return [assumption.model_dump(mode="json") for assumption in assumptions]


def query_lectures(state_path: Path | None = None) -> List[dict]:
    state = _load_state(state_path)
    rows: List[dict] = []
    for number in sorted(state.lectures):
        lecture = state.lectures[number]
        rows.append(
            {
                "number": number,
                "title": lecture.title,
                "objectives": list(lecture.objectives),
                "prerequisites": state.prerequisites_for(number),
                "notation": list(lecture.notation_introduced),
                "files": list(lecture.files),
            }
        )
    return rows


def _print_table(headers: list[str], rows: List[dict], keys: list[str]) -> None:
    table = Table(*headers)
    for row in rows:
        table.add_row(*[_cell(row.get(key)) for key in keys])
    console.print(table)


def _cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _print_summary(summary: Dict[str, Any]) -> None:
    console.print(f"[bold]Course:[/bold] {summary.get('course')} ({summary.get('language')})")
    table = Table("Metric", "Count")
    for label, key in (
        ("Learning objectives", "learning_objectives"),
        ("Notation symbols", "notation_symbols"),
        ("Notation writes", "notation_writes"),
        ("Assumptions", "assumptions"),
        ("Lectures", "lectures"),
    ):
        table.add_row(label, str(summary["counts"].get(key, 0)))
    console.print(table)
    if summary.get("consistent"):
        console.print("[green]Notation is consistent.[/green]")
    else:
        for conflict in summary.get("conflicts", []):
            console.print(f"[red]{conflict}[/red]")


STATE_OPTION_HELP = f"Course state JSON (defaults to {STATE_ENV_VAR} or {DEFAULT_STATE})."


@app.command()
def summary(
    state: Path | None = typer.Option(None, "--state", show_default=False, help=STATE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """Summarize the state document with counts and the consistency status."""

    payload = query_summary(state)
    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    _print_summary(payload)


@app.command()
def notation(
    state: Path | None = typer.Option(None, "--state", show_default=False, help=STATE_OPTION_HELP),
    lecture: Optional[int] = typer.Option(None, help="Only symbols introduced up to this lecture."),
    symbol: Optional[str] = typer.Option(None, help="Show every recorded write for one symbol."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List the live notation registry."""

    rows = query_notation(state, lecture, symbol)
    if as_json:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return
    if not rows:
        console.print("[yellow]No notation recorded.[/yellow]")
        return
    _print_table(["Symbol", "Meaning", "Lecture", "Context"], rows, ["symbol", "meaning", "introduced_in", "context"])


@app.command()
def assumptions(
    state: Path | None = typer.Option(None, "--state", show_default=False, help=STATE_OPTION_HELP),
    lecture: Optional[int] = typer.Option(None, help="Only assumptions active in this lecture."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List modelling assumptions and their validity ranges."""

    rows = query_assumptions(state, lecture)
    if as_json:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return
    _print_table(
        ["ID", "Description", "From", "To"],
        rows,
        ["id", "description", "valid_from", "valid_to"],
    )


@app.command()
def lectures(
    state: Path | None = typer.Option(None, "--state", show_default=False, help=STATE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List lectures with objectives, prerequisites, and generated files."""

    rows = query_lectures(state)
    if as_json:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return
    _print_table(
        ["#", "Title", "Objectives", "Prerequisites", "Notation", "Files"],
        rows,
        ["number", "title", "objectives", "prerequisites", "notation", "files"],
    )


@app.command()
def check(
    state: Path | None = typer.Option(None, "--state", show_default=False, help=STATE_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text."),
) -> None:
    """Exit non-zero when any symbol carries conflicting meanings."""

    consistent, conflicts = _load_state(state).verify_notation_consistency()
    if as_json:
        typer.echo(json.dumps({"consistent": consistent, "conflicts": conflicts}, indent=2, ensure_ascii=False))
    elif consistent:
        console.print("[green]Notation is consistent.[/green]")
    else:
        for conflict in conflicts:
            console.print(f"[red]{conflict}[/red]")
    if not consistent:
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
