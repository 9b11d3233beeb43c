"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from ..config import ProfilerConfig, load_config
from ..exceptions import AnalysisError, VibeProfilerError
from ..logging_config import setup_logging

console = Console()


def resolve_config(ctx: typer.Context) -> ProfilerConfig:
    """Load configuration from the global options and set up logging."""
    opts = ctx.obj or {}
    config = load_config(
        config_file=opts.get("config"),
        verbose=opts.get("verbose", False),
        quiet=opts.get("quiet", False),
    )
    setup_logging(
        verbose=config.verbosity == "verbose",
        quiet=config.verbosity == "quiet",
        log_file=config.log_file,
    )
    return config


def read_json(path: Path, key: str) -> list:
    """Read a JSON list, either bare or wrapped as ``{key: [...]}``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise AnalysisError(f"Cannot read {path}", details={"error": str(e)})
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    if not isinstance(data, list):
        raise AnalysisError(f"Expected a JSON list in {path}", details={"key": key})
    return data


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def fail(error: VibeProfilerError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


def level_style(level: str) -> str:
    return {"high": "green", "medium": "yellow", "low": "red"}.get(level, "white")
