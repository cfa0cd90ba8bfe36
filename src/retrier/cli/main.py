"""retrier CLI - demo runs, policy listing, help topics."""

from __future__ import annotations

import asyncio
import random

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from retrier.foundation.errors import PolicyConfigurationError
from retrier.foundation.registry import get_registry
from retrier.runtime.observability import configure_logging
from retrier.runtime.retry import CONSTANT_DELAY, retrier

from .topics import TOPICS

app = typer.Typer(
    name="retrier",
    help="Retry an async operation under a pluggable policy.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

console = Console()


class DemoFailure(Exception):
    """Failure raised by the demo subject."""


@app.callback()
def callback(
    log_level: str | None = typer.Option(None, "--log-level", help="Override RETRIER_LOG_LEVEL"),
    log_format: str | None = typer.Option(None, "--log-format", help="console, json or none"),
) -> None:
    if log_level or log_format:
        configure_logging(format=log_format, level=log_level)


@app.command()
def demo(
    delay: float = typer.Option(2000, help="Delay between attempts, in delay units (ms by default)"),
    max_retries: float = typer.Option(3, "--max-retries", help="Retries after the first attempt"),
    success_rate: float = typer.Option(0.1, "--success-rate", min=0.0, max=1.0, help="Chance each attempt succeeds"),
    seed: int | None = typer.Option(None, help="Seed for reproducible runs"),
) -> None:
    """Retry a randomly failing subject with the constant_delay policy."""
    rng = random.Random(seed)

    async def flaky() -> float:
        value = rng.random()
        if value < success_rate:
            console.print(f"Attempt succeeds with value {value:.4f}. We are done.")
            return value
        console.print(f"Attempt fails with value {value:.4f}.")
        raise DemoFailure("Random attempt failure.")

    try:
        run = retrier(flaky, {CONSTANT_DELAY: {"delay": delay, "max_retries": max_retries}})
    except PolicyConfigurationError as exc:
        console.print(f"[red]{escape(str(exc.error))}[/red]")
        raise typer.Exit(2) from None

    try:
        value = asyncio.run(run)
    except DemoFailure as exc:
        console.print(f"Final state: Given up after {int(max_retries)} retries.\n{escape(repr(exc))}")
        raise typer.Exit(1) from None
    console.print(f"Final state: {value}")


@app.command("policies")
def list_policies() -> None:
    """List registered retry policies."""
    table = Table(title="Registered policies")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")
    for entry in sorted(get_registry(), key=lambda e: e.name):
        params = ", ".join(f"{p.name}: {p.type}" for p in entry.params)
        table.add_row(entry.name, params or "-", entry.description or "-")
    console.print(table)


@app.command("help")
def show_help(topic: str | None = typer.Argument(None, help="Topic name")) -> None:
    """Show a help topic, or list topics."""
    if topic is None:
        console.print("Available topics: " + ", ".join(sorted(TOPICS)))
        console.print("Use: retrier help <topic>")
        return
    if (text := TOPICS.get(topic.lower())) is None:
        console.print(f"Unknown topic: {escape(topic)}. Available: {', '.join(sorted(TOPICS))}")
        raise typer.Exit(1)
    console.print(text, markup=False, highlight=False)


def main() -> None:
    app()
