"""Coverage command: probe the persona rule table for gaps."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from ..coverage import LiveProfile, run_coverage_probe
from ..exceptions import AnalysisError, VibeProfilerError
from ..personas.rules import FALLBACK_PERSONA
from . import app
from ._common import console, fail, print_json, read_json, resolve_config


@app.command()
def coverage(
    ctx: typer.Context,
    step: int = typer.Option(..., "--step", "-s", help="Grid spacing in score points (1-100)"),
    axes: Optional[List[str]] = typer.Option(
        None, "--axis", "-a", help="Axis to vary (name or letter); repeat for several"
    ),
    users_file: Optional[Path] = typer.Option(
        None,
        "--users",
        help="JSON list of live profiles to cross-check",
        exists=True,
        dir_okay=False,
    ),
    samples: Optional[int] = typer.Option(None, "--samples", min=0, help="Fallback vectors to keep"),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """
    Run every vector of an axis grid through the persona rules.

    Six axes at step 10 is 1,771,561 vectors; pick the step accordingly.

    [bold cyan]Examples:[/bold cyan]

      vibe-profiler coverage --step 20

      vibe-profiler coverage --step 5 --axis A --axis B
    """
    try:
        config = resolve_config(ctx)
        live = None
        if users_file is not None:
            try:
                live = [LiveProfile.from_dict(row) for row in read_json(users_file, "users")]
            except (KeyError, TypeError, ValueError) as e:
                raise AnalysisError(f"Invalid live profile in {users_file}", details={"error": str(e)})

        report = run_coverage_probe(
            step,
            axes=axes or None,
            live_profiles=live,
            sample_limit=samples,
            thresholds=config.thresholds,
        )
    except VibeProfilerError as e:
        fail(e)

    if json_output:
        print_json(report.to_dict())
        return

    console.print()
    console.print(
        f"[bold cyan]RULE COVERAGE[/bold cyan] -- step {report.step_size}, "
        f"axes {''.join(report.probed_axes)}"
    )
    console.print(
        f"{report.total_combinations} combinations, "
        f"{report.fallback_count} fallback ({report.fallback_percentage}%)"
    )

    table = Table(show_header=True)
    table.add_column("Persona")
    table.add_column("Vectors", justify="right")
    for persona_id, count in report.persona_counts.items():
        label = f"{persona_id} (fallback)" if persona_id == FALLBACK_PERSONA.id else persona_id
        table.add_row(label, str(count))
    console.print(table)

    for sample in report.sample_fallbacks:
        vector = " ".join(f"{k}={v}" for k, v in sample.axes.items())
        console.print(f"  {vector}", style="dim")
        console.print(f"    {sample.suggestion}", style="dim")

    if report.real_user_fallbacks:
        console.print()
        console.print(f"[yellow]{len(report.real_user_fallbacks)} live user(s) on the fallback[/yellow]")
        for user in report.real_user_fallbacks:
            console.print(f"  {user.username or user.user_id}: {user.suggestion}")
    console.print()
