"""Main CLI entry point for switchboard."""

import typer
from rich.console import Console

from switchboard.cli.commands.config import config
from switchboard.cli.commands.health import health
from switchboard.cli.commands.models import models
from switchboard.cli.commands.start import start
from switchboard.core.logging import configure_root_logging

app = typer.Typer(
    name="swb",
    help="Switchboard CLI - provider registry and model routing",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="start")(start)
app.command(name="models")(models)
app.command(name="health")(health)
app.command(name="config")(config)


@app.command()
def version() -> None:
    """Show version information."""
    from switchboard import __version__

    console = Console()
    console.print(f"[bold cyan]swb[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Switchboard CLI."""
    # Provider warnings stay visible; everything else only with --verbose
    configure_root_logging("DEBUG" if verbose else "WARNING")


if __name__ == "__main__":
    app()
