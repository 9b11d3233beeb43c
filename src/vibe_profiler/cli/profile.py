"""Profile command: aggregate repository summaries."""

from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.table import Table

from ..exceptions import AnalysisError, VibeProfilerError
from ..profile import RepoInsightSummary, aggregate_profile
from . import app
from ._common import console, fail, level_style, print_json, read_json, resolve_config


@app.command()
def profile(
    ctx: typer.Context,
    summaries_file: Path = typer.Argument(
        ..., help="JSON list of repository summaries", exists=True, dir_okay=False
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """
    Combine per-repository summaries into one commit-weighted profile.

    [bold cyan]Examples:[/bold cyan]

      vibe-profiler profile summaries.json
    """
    try:
        config = resolve_config(ctx)
        try:
            summaries = [
                RepoInsightSummary.from_dict(row) for row in read_json(summaries_file, "summaries")
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise AnalysisError(f"Invalid summary in {summaries_file}", details={"error": str(e)})
        unified = aggregate_profile(
            summaries,
            updated_at=datetime.now(timezone.utc).isoformat(),
            thresholds=config.thresholds,
        )
    except VibeProfilerError as e:
        fail(e)

    if json_output:
        print_json(unified.to_dict())
        return

    persona = unified.persona
    console.print()
    console.print(
        f"[bold cyan]{persona.name}[/bold cyan]  "
        f"[{level_style(persona.confidence)}]{persona.confidence} confidence[/]"
    )
    console.print(
        f"{unified.total_repos} repos, {unified.total_commits} commits, "
        f"data quality {unified.data_quality_score}"
    )

    table = Table(show_header=True)
    table.add_column("Repo")
    table.add_column("Persona")
    table.add_column("Commits", justify="right")
    table.add_column("Weight", justify="right")
    for row in unified.repo_breakdown:
        name = f"{row.repo_name} [dim](legacy)[/dim]" if row.placeholder else row.repo_name
        table.add_row(name, row.persona_name or "-", str(row.commit_count), f"{row.weight:.1f}%")
    console.print(table)

    axes = "  ".join(f"{k}={v}" for k, v in unified.axes.letters().items())
    console.print(f"Axes: {axes}")
    console.print()
