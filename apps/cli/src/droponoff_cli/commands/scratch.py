"""Dangerous scratch_files cleanup command."""

from pathlib import Path

import typer
from droponoff.actions import ScratchActions
from rich.progress import (
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from droponoff_cli.commands._context import console, load_config

WARNING = """\
This will nuke scratch files. It should only be used:

- With Dropbox entirely turned off.
- With no pending synchronization operations (especially uploads) at the
  time Dropbox was turned off.

If this is run while uploads are occurring it is highly likely to lead to
data loss. Even if used as recommended, this command is risky and is not
in any way supported by Dropbox or the author of this tool."""


def nuke_scratch(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """DANGEROUS: Delete scratch_files contents after ensuring Dropbox is stopped."""
    console.print(f"[yellow]{WARNING}[/yellow]\n")

    if not yes and not typer.confirm("Delete all scratch_files contents?"):
        console.print("Aborted.")
        raise typer.Exit(code=1)

    actions = ScratchActions(config=load_config())

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        DownloadColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Scanning scratch_files...", total=None)

        def progress_callback(deleted: int, next_size: int, path: Path):
            progress.update(task, completed=deleted, description=f"rm {path.name}")

        result = actions.nuke(progress_callback=progress_callback)

        report = (result.data or {}).get("report")
        if report is not None:
            progress.update(task, completed=report.bytes_freed, description="Done")

    if not result.success:
        console.print(f"[red]✗[/red] {result.message}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] {result.message}")
    if report is not None and report.skipped:
        console.print(f"[dim]Skipped {len(report.skipped)} nested entr(ies)[/dim]")
