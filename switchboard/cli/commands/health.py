"""Provider health command for the swb CLI."""

import asyncio

import typer
from rich.console import Console

from switchboard.cli.presenters.models import HealthPresenter
from switchboard.cli.runtime import load_config_or_exit, with_registry


def health(
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 unless every provider is healthy"
    ),
) -> None:
    """Probe every configured provider concurrently."""
    console = Console()
    config = load_config_or_exit(console)

    statuses = asyncio.run(with_registry(config, lambda registry: registry.check_all_health()))
    HealthPresenter(console).present(statuses)

    if strict and (not statuses or not all(statuses.values())):
        raise typer.Exit(code=1)
