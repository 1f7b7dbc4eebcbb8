"""Configuration command for the swb CLI."""

import os

import typer
from rich.console import Console
from rich.table import Table

from switchboard.cli.runtime import load_config_or_exit
from switchboard.core.config import ConfigSchema, validate_all

STATUS_STYLES = {
    "success": "[green]✅ registered[/green]",
    "partial": "[yellow]⚠️  partial[/yellow]",
    "missing": "[dim]not configured[/dim]",
}


def config(
    docs: bool = typer.Option(False, "--docs", help="Print Markdown documentation and exit"),
) -> None:
    """Show configuration values, provider credentials and validation errors."""
    console = Console()

    if docs:
        typer.echo(ConfigSchema.generate_markdown_docs())
        return

    errors = validate_all()
    if errors:
        console.print("[bold red]Configuration errors:[/bold red]")
        for error in errors:
            console.print(f"  [red]❌ {error}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Switchboard Settings")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Source")
    table.add_column("Description")
    for _name, spec in sorted(ConfigSchema.all_specs().items()):
        raw_value = os.environ.get(spec.name)
        if raw_value:
            value, source = raw_value, "env"
        else:
            default = getattr(spec.default, "value", spec.default)
            if isinstance(default, tuple):
                default = ",".join(default)
            value, source = ("-" if default is None else str(default)), "default"
        table.add_row(spec.name, value, source, spec.description)
    console.print(table)

    settings = load_config_or_exit(console)
    settings.load_provider_configs()

    providers = Table(title="Providers (registration order)")
    providers.add_column("Provider", style="cyan")
    providers.add_column("Status")
    providers.add_column("API Key (sha256)")
    providers.add_column("Base URL")
    providers.add_column("Notes")
    for result in settings.provider_load_results:
        providers.add_row(
            result.name,
            STATUS_STYLES.get(result.status, result.status),
            result.api_key_hash or "-",
            result.base_url or "-",
            result.message or "",
        )
    console.print(providers)
