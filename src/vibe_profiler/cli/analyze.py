"""Analyze command: profile one repository."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..api import RepoAnalysis, analyze_commits, summarize_analysis
from ..axes.models import AXIS_LABELS, AXIS_LETTERS
from ..commits.git_extractor import GitExtractor
from ..exceptions import AnalysisError, VibeProfilerError
from . import app
from ._common import console, fail, level_style, print_json, read_json, resolve_config


def _output_rich(analysis: RepoAnalysis) -> None:
    persona = analysis.persona
    console.print()
    console.print(
        f"[bold cyan]{persona.name}[/bold cyan]  "
        f"[{level_style(persona.confidence)}]{persona.confidence} confidence[/]  "
        f"score {persona.score}"
    )
    console.print(f"[dim]{persona.tagline}[/dim]")
    console.print(f"{analysis.commit_count} commits in {len(analysis.episodes)} episodes")
    console.print()

    table = Table(show_header=True, pad_edge=True)
    table.add_column("", width=2)
    table.add_column("Axis", min_width=24)
    table.add_column("Score", justify="right")
    table.add_column("Level")
    table.add_column("Evidence")
    for key, axis in analysis.axes.items():
        table.add_row(
            AXIS_LETTERS[key],
            AXIS_LABELS[key],
            str(axis.score),
            f"[{level_style(axis.level)}]{axis.level}[/]",
            axis.why[0] if axis.why else "",
        )
    console.print(table)

    if persona.matched_rules:
        console.print(f"Matched: {', '.join(persona.matched_rules)}")
    if persona.diagnostics is not None:
        console.print(f"[yellow]No persona rule matched.[/yellow] {persona.diagnostics.suggestion}")

    ai = analysis.ai_tools
    if ai.detected:
        console.print()
        tools = Table(show_header=True, title="AI collaboration")
        tools.add_column("Tool")
        tools.add_column("Commits", justify="right")
        tools.add_column("Share", justify="right")
        for usage in ai.tools:
            tools.add_row(usage.name, str(usage.commit_count), f"{usage.percentage:.1f}%")
        console.print(tools)
        console.print(
            f"{ai.ai_assisted_commits} AI-assisted commits "
            f"({ai.ai_collaboration_rate * 100:.1f}%), {ai.confidence} confidence"
        )

    timing = analysis.timing
    if timing.total_commits:
        console.print()
        console.print(
            f"Longest streak: {timing.streak_days} day(s); "
            f"peak day {timing.peak_weekday_name}, peak window {timing.peak_window}"
        )
    console.print()


@app.command()
def analyze(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Argument(
        None,
        help="Local git repository (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    commits_file: Optional[Path] = typer.Option(
        None,
        "--commits",
        help="Read commit records from a JSON file instead of git",
        exists=True,
        dir_okay=False,
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
    summary_out: Optional[Path] = typer.Option(
        None,
        "--summary-out",
        help="Write a repository summary JSON for use with 'profile'",
        dir_okay=False,
    ),
    repo_name: Optional[str] = typer.Option(None, "--repo-name", help="Name recorded in the summary"),
):
    """
    Score the six axes and match a persona for one repository.

    [bold cyan]Examples:[/bold cyan]

      vibe-profiler analyze ~/code/my-app

      vibe-profiler analyze --commits commits.json --json
    """
    try:
        config = resolve_config(ctx)
        target = (repo or Path.cwd()).resolve()

        if commits_file is not None:
            records = read_json(commits_file, "commits")
            source = commits_file.stem
        else:
            records = GitExtractor(str(target), config.git_max_commits).extract()
            if records is None:
                raise AnalysisError("Not a git repository", details={"path": str(target)})
            source = target.name

        analysis = analyze_commits(records, thresholds=config.thresholds)

        if summary_out is not None:
            now = datetime.now(timezone.utc)
            summary = summarize_analysis(
                analysis,
                job_id=f"{source}-{now.strftime('%Y%m%d%H%M%S')}",
                repo_name=repo_name or source,
                analyzed_at=now.isoformat(),
            )
            summary_out.write_text(json.dumps(summary.to_dict(), indent=2), encoding="utf-8")

        if json_output:
            print_json(analysis.to_dict())
        else:
            _output_rich(analysis)
    except VibeProfilerError as e:
        fail(e)
