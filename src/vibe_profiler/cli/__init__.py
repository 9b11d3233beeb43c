"""CLI entry point: registers all subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="vibe-profiler",
    help="Vibe Coding Profiler - behavioral profiles from commit history",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Profile a developer's coding style from commit metadata.

    [bold cyan]Examples:[/bold cyan]

      vibe-profiler analyze .

      vibe-profiler coverage --step 10

      vibe-profiler profile summaries.json --json
    """
    if version:
        console.print(f"[bold cyan]Vibe Coding Profiler[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .community import community as _community  # noqa: F401, E402
from .coverage import coverage as _coverage  # noqa: F401, E402
from .profile import profile as _profile  # noqa: F401, E402


def main() -> None:
    app()
