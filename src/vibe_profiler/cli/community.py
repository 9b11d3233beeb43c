"""Community command: k-anonymous rollup over snapshot rows."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..axes.models import AXIS_LETTERS
from ..community import CommunitySnapshot, compute_community_rollup
from ..exceptions import AnalysisError, VibeProfilerError
from . import app
from ._common import console, fail, print_json, read_json, resolve_config


@app.command()
def community(
    ctx: typer.Context,
    snapshots_file: Path = typer.Argument(
        ..., help="JSON list of eligible snapshot rows", exists=True, dir_okay=False
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Date stamped on the payload"),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """
    Compute community statistics, suppressed below the privacy threshold.

    [bold cyan]Examples:[/bold cyan]

      vibe-profiler community snapshots.json --as-of 2026-01-31
    """
    try:
        config = resolve_config(ctx)
        try:
            snapshots = [
                CommunitySnapshot.from_dict(row) for row in read_json(snapshots_file, "snapshots")
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise AnalysisError(f"Invalid snapshot in {snapshots_file}", details={"error": str(e)})
        payload = compute_community_rollup(snapshots, as_of=as_of, thresholds=config.thresholds)
    except VibeProfilerError as e:
        fail(e)

    if json_output:
        print_json(payload.to_dict())
        return

    console.print()
    if payload.suppressed:
        console.print(
            f"[yellow]Suppressed ({payload.reason}):[/yellow] "
            f"{payload.eligible_profiles} of {payload.threshold} profiles needed"
        )
        console.print()
        return

    console.print(
        f"[bold cyan]COMMUNITY[/bold cyan] -- {payload.eligible_profiles} profiles, "
        f"{payload.total_analyzed_commits} commits"
    )
    personas = Table(show_header=True)
    personas.add_column("Persona")
    personas.add_column("Share", justify="right")
    for row in payload.personas:
        personas.add_row(row.name, f"{row.pct:.1f}%")
    console.print(personas)

    axes = Table(show_header=True)
    axes.add_column("Axis")
    axes.add_column("p25", justify="right")
    axes.add_column("p50", justify="right")
    axes.add_column("p75", justify="right")
    for key, stats in payload.axes.items():
        axes.add_row(AXIS_LETTERS[key], str(stats.p25), str(stats.p50), str(stats.p75))
    console.print(axes)
    console.print()
