"""Presenters for catalog and health display in the CLI."""

from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from switchboard.core.models.model_info import ModelDescriptor

PROVIDER_COLORS = {
    "openai": "blue",
    "anthropic": "green",
    "google": "red",
    "alibaba": "magenta",
}


def _provider_cell(provider_name: str) -> str:
    color = PROVIDER_COLORS.get(provider_name.lower())
    return f"[{color}]{provider_name}[/{color}]" if color else provider_name


def _context_cell(tokens: int | None) -> str:
    if not tokens:
        return "-"
    if tokens >= 1_000_000 and tokens % 1_000_000 == 0:
        return f"{tokens // 1_000_000}M"
    if tokens >= 1000:
        return f"{tokens // 1000}k"
    return str(tokens)


class CatalogPresenter:
    """Renders catalog entries as a Rich table.

    Accepts descriptors or their ``to_dict()`` form so that local and
    server-backed listings share one layout. Contains no business logic.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present(
        self,
        models: Iterable[ModelDescriptor | Mapping[str, Any]],
        default_id: str | None = None,
        title: str = "Available Models",
    ) -> None:
        rows = [m.to_dict() if isinstance(m, ModelDescriptor) else dict(m) for m in models]
        if not rows:
            self.console.print("[yellow]No models available.[/yellow]")
            return

        table = Table(title=f"{title} ({len(rows)})")
        table.add_column("Model ID", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Provider")
        table.add_column("Context", justify="right")
        table.add_column("Default", justify="center")

        for row in rows:
            marker = ""
            if row.get("id") == default_id:
                marker = "[bold green]★[/bold green]"
            elif row.get("is_default"):
                marker = "•"
            table.add_row(
                str(row.get("id", "")),
                str(row.get("display_name", "")),
                _provider_cell(str(row.get("provider_name", ""))),
                _context_cell(row.get("context_window_tokens")),
                marker,
            )

        self.console.print(table)
        if default_id:
            self.console.print(f"★ default model: [bold]{default_id}[/bold]   • provider default")


class HealthPresenter:
    """Renders a provider health mapping."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present(self, statuses: Mapping[str, bool]) -> None:
        if not statuses:
            self.console.print(
                "[yellow]No providers registered. Set at least one {PROVIDER}_API_KEY.[/yellow]"
            )
            return

        table = Table(title="Provider Health")
        table.add_column("Provider")
        table.add_column("Status")
        for provider_name, healthy in statuses.items():
            status = "[green]✅ healthy[/green]" if healthy else "[red]❌ unhealthy[/red]"
            table.add_row(_provider_cell(provider_name), status)
        self.console.print(table)

        healthy_count = sum(1 for ok in statuses.values() if ok)
        self.console.print(f"{healthy_count}/{len(statuses)} providers healthy")
