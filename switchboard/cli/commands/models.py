"""Model catalog command for the swb CLI."""

import asyncio
import json

import httpx
import typer
from rich.console import Console

from switchboard.cli.presenters.models import CatalogPresenter
from switchboard.cli.runtime import load_config_or_exit, with_registry
from switchboard.core.provider.default_selector import DefaultModelSelector


def models(
    provider: str = typer.Option(None, "--provider", "-p", help="Only show this provider's models"),
    server: str = typer.Option(
        None, "--server", help="Read the catalog from a running server (e.g. http://localhost:8000)"
    ),
    refresh: bool = typer.Option(
        False, "--refresh", help="With --server: force the server to refetch its catalog"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List models across all configured providers."""
    console = Console()

    if server:
        rows, default_id = _fetch_from_server(console, server.rstrip("/"), refresh)
    else:
        if refresh:
            console.print("[dim]--refresh only applies with --server; fetching directly[/dim]")
        config = load_config_or_exit(console)
        catalog = asyncio.run(
            with_registry(config, lambda registry: registry.load_models(force_refresh=True))
        )
        selected = DefaultModelSelector(config.default_provider).select(catalog)
        rows = catalog.to_list()
        default_id = selected.id if selected else None

    if provider:
        rows = [row for row in rows if row.get("provider_name") == provider.lower()]

    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return

    CatalogPresenter(console).present(rows, default_id=default_id)


def _fetch_from_server(console: Console, base_url: str, refresh: bool) -> tuple[list, str | None]:
    try:
        with httpx.Client(timeout=60.0) as client:
            if refresh:
                response = client.post(f"{base_url}/api/models/refresh")
                response.raise_for_status()
                rows = response.json()["models"]
            else:
                response = client.get(f"{base_url}/api/models/available")
                response.raise_for_status()
                rows = response.json()

            default_response = client.get(f"{base_url}/api/models/default")
            default_id = (
                default_response.json().get("id") if default_response.status_code == 200 else None
            )
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Could not read models from {base_url}: {e}[/red]")
        raise typer.Exit(code=1) from e
    return rows, default_id
