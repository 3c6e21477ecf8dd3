"""ON/OFF commands."""

import typer
from droponoff.actions import ToggleActions
from droponoff.models.actions import ActionResult

from droponoff_cli.commands._context import console, load_config


def _get_toggle_actions() -> ToggleActions:
    """Get configured ToggleActions instance."""
    return ToggleActions(config=load_config())


def _report(result: ActionResult) -> None:
    if result.success:
        console.print(f"[green]✓[/green] {result.message}")
        return

    console.print(f"[red]✗[/red] {result.message}")
    raise typer.Exit(code=1)


def on():
    """Restore Dropbox to normal operation."""
    actions = _get_toggle_actions()
    _report(actions.on())


def off():
    """Disable Dropbox completely (DOES NOT WAIT FOR SYNCHRONIZATION TO FINISH)."""
    actions = _get_toggle_actions()
    _report(actions.off())
