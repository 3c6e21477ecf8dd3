import typer
from droponoff_logging import configure

from droponoff_cli.commands import _context, scratch, status, toggle

app = typer.Typer(
    help="A reversible kill switch for Dropbox on macOS",
    no_args_is_help=True,
    invoke_without_command=False,
    add_completion=False
)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """droponoff - switch Dropbox fully on or fully off."""
    _context.state["verbose"] = verbose
    if verbose:
        configure(level="DEBUG")

app.command(name="on")(toggle.on)
app.command(name="off")(toggle.off)
app.command(name="status")(status.status)
app.command(name="nuke-scratch")(scratch.nuke_scratch)

def main():
    app()

if __name__ == "__main__":
    main()
