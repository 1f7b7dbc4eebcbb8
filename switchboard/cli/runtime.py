"""Helpers shared by CLI commands that need configuration or a registry."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console

from switchboard.core.config import Config, ConfigError
from switchboard.core.provider.provider_registry import ProviderRegistry
from switchboard.main import build_registry

T = TypeVar("T")


def load_config_or_exit(console: Console) -> Config:
    try:
        return Config()
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(code=1) from e


async def with_registry(config: Config, action: Callable[[ProviderRegistry], Awaitable[T]]) -> T:
    """Build a registry, run ``action`` against it, and close its clients."""
    registry = build_registry(config)
    try:
        return await action(registry)
    finally:
        await registry.aclose()
