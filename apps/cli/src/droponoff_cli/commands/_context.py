"""Shared construction of configuration for the CLI commands."""

from droponoff.models.config import DroponoffConfig
from droponoff.services import ConfigManager
from droponoff_logging import configure, configure_from_config
from rich.console import Console

console = Console()

# Flags set by the top-level callback
state = {"verbose": False}


def load_config() -> DroponoffConfig:
    """Load configuration and apply its logging settings."""
    try:
        config = ConfigManager().config
    except Exception as e:
        # Fallback to defaults if config can't be loaded
        console.print(f"[yellow]Ignoring unreadable config: {e}[/yellow]")
        config = DroponoffConfig()

    configure_from_config(config)
    if state["verbose"]:
        configure(level="DEBUG")
    return config
