"""Read-only status command."""

import typer
from droponoff.actions import Controllers, aggregate_mode
from droponoff.errors import DroponoffError
from droponoff.models.launchctl import ServiceState
from droponoff.models.status import SystemSnapshot
from rich.table import Table

from droponoff_cli.commands._context import console, load_config

_SERVICE_STYLES = {
    ServiceState.ENABLED: "[green]enabled[/green]",
    ServiceState.DISABLED: "[yellow]disabled[/yellow]",
    ServiceState.MISSING: "[red]MISSING[/red]",
}

_EXTENSION_STYLES = {
    "enabled": "[green]enabled[/green]",
    "disabled": "[yellow]disabled[/yellow]",
    "not found": "[dim]not found[/dim]",
}

_MODE_STYLES = {
    "on": "[green]ON[/green]",
    "off": "[yellow]OFF[/yellow]",
    "partial": "[red]PARTIAL[/red]",
}


def render_status(snapshot: SystemSnapshot, app_name: str, mode: str) -> None:
    """Print a snapshot as tables."""
    table = Table(title=f"{app_name} Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(f"{app_name}.app", str(snapshot.app_path) if snapshot.app_path else "[red]NOT FOUND[/red]")
    table.add_row("Mode", _MODE_STYLES[mode])
    table.add_row("LaunchAgent", _SERVICE_STYLES[snapshot.service_state])
    table.add_row("Processes", str(len(snapshot.processes)))
    console.print(table)

    if snapshot.processes:
        processes = Table(title="Running processes")
        processes.add_column("PID", style="cyan", justify="right")
        processes.add_column("Name", style="magenta")
        for process in snapshot.processes:
            processes.add_row(str(process.pid), process.name)
        console.print(processes)

    extensions = Table(title="Extensions")
    extensions.add_column("Identifier", style="cyan")
    extensions.add_column("State")
    for identifier, record in snapshot.extensions:
        extensions.add_row(identifier, _EXTENSION_STYLES[record.label])
    console.print(extensions)


def status():
    """Show current Dropbox state (read-only)."""
    config = load_config()
    controllers = Controllers.from_config(config)

    try:
        snapshot = controllers.status.snapshot()
    except DroponoffError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)

    mode = aggregate_mode(snapshot, frozenset({config.app.legacy_extension_id}))
    render_status(snapshot, config.app.name, mode)
