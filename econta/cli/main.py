"""CLI entry point for the economics teaching assistant."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from course_state import CourseState, CourseStateStore
from econta import get_version
from econta.core.config import load_ta_config
from econta.pipeline import TaskRunOutcome, bootstrap_run, run_task
from econta.pipeline.bootstrap import DEFAULT_STATE_FILENAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="econta", description="Multi-agent teaching assistant for economics courses.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Classify a task, delegate it to TA handlers and verify the result.")
    run.add_argument("--task", "-t", required=True, help="Free-text task description.")
    run.add_argument("--lang", "-l", choices=("en", "de"), default=None, help="Course language (default from config: en).")
    run.add_argument("--course", "-c", default=None, help="Course name (default from config).")
    run.add_argument("--path", "-p", default=None, help="Course materials directory (default: ./course_materials).")
    run.add_argument("--context", default=None, help="Additional context passed to every handler.")
    run.add_argument(
        "--state",
        default=None,
        help=f"Course state JSON (default: <path>/{DEFAULT_STATE_FILENAME}).",
    )
    run.add_argument("--model", default=None, help="Override the litellm-style model id.")
    run.add_argument("--config", default=None, help="Optional YAML config file.")
    run.add_argument("--output", "-o", default=None, help="Also write the final report to this file.")

    init = subparsers.add_parser("init", help="Create the materials directory and an empty course state.")
    init.add_argument("--course", "-c", default=None, help="Course name (default from config).")
    init.add_argument("--lang", "-l", choices=("en", "de"), default=None, help="Course language.")
    init.add_argument("--path", "-p", default=None, help="Course materials directory.")
    init.add_argument("--state", default=None, help="Course state JSON path.")
    init.add_argument("--config", default=None, help="Optional YAML config file.")
    init.add_argument("--force", action="store_true", help="Overwrite an existing state document.")
    return parser


def _resolve_path(value: str | Path, *, base: Path | None = None) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate.resolve()
    anchor = Path(base).expanduser().resolve() if base is not None else Path.cwd()
    return (anchor / candidate).resolve()


def _resolve_optional(value: str | Path | None, *, base: Path | None = None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(value, base=base)


def _config_path(value: str | None) -> Path | None:
    path = _resolve_optional(value)
    if path is not None and not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    return path


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "init":
            return _init(args)
        outcome = _run(args)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    except Exception as exc:  # noqa: BLE001 - bubble up to CLI
        print(f"[econta] error: {exc}", file=sys.stderr)
        return 1

    print(outcome.report)
    if args.output:
        output = _resolve_path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(outcome.report, encoding="utf-8")
    return 0 if outcome.success else 1


def _run(args: argparse.Namespace) -> TaskRunOutcome:
    ctx = bootstrap_run(
        _config_path(args.config),
        course_name=args.course,
        language=args.lang,
        materials_path=_resolve_optional(args.path),
        state_path=_resolve_optional(args.state),
        model=args.model,
    )
    return run_task(ctx, args.task, args.context)


def _init(args: argparse.Namespace) -> int:
    config_path = _config_path(args.config)
    config = load_ta_config(config_path, base_dir=Path.cwd())
    materials_path = _resolve_optional(args.path) or _resolve_path(config.course.materials_path)
    state_path = _resolve_optional(args.state) or config.course.state_path or materials_path / DEFAULT_STATE_FILENAME

    materials_path.mkdir(parents=True, exist_ok=True)
    store = CourseStateStore(state_path)
    if store.exists() and not args.force:
        print(f"[econta] state already exists at {store.path}; pass --force to overwrite")
        return 1
    state = CourseState(
        course_name=args.course or config.course.name,
        language=args.lang or config.course.language,
    )
    store.save(state)
    print(f"[econta] initialised {state.course_name} ({state.language}) at {materials_path}")
    print(f"[econta] state: {store.path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
