"""Start command for the swb CLI."""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from switchboard.cli.runtime import load_config_or_exit
from switchboard.core.logging import configure_root_logging


def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the Switchboard server."""
    console = Console()
    config = load_config_or_exit(console)

    server_host = host or config.host
    server_port = port or config.port

    table = Table(title="Switchboard Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server URL", f"http://{server_host}:{server_port}")
    table.add_row("Providers", ", ".join(config.provider_names))
    table.add_row("Default Provider", config.default_provider or "-")
    table.add_row("Catalog TTL", f"{config.cache_ttl_seconds:g}s")
    table.add_row("Stale Policy", config.stale_policy.value)
    refresh = config.refresh_interval_seconds
    table.add_row("Periodic Refresh", f"every {refresh:g}s" if refresh > 0 else "disabled")
    table.add_row("Request Timeout", f"{config.request_timeout:g}s")
    table.add_row("Log Level", config.log_level)

    console.print(table)

    log_level = configure_root_logging(config.log_level).lower()
    uvicorn.run(
        "switchboard.main:create_app",
        factory=True,
        host=server_host,
        port=server_port,
        reload=reload,
        log_level=log_level,
    )
