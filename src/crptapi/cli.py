"""Click CLI for crptapi — submit goods-introduction documents."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from crptapi.config.hierarchy import load_config_hierarchy
from crptapi.errors.exceptions import (
    Cancelled,
    Misconfiguration,
    RemoteRejected,
    TransportError,
)
from crptapi.types import TimeUnit

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="crptapi")
def cli() -> None:
    """crptapi — rate-limited client for the goods-tracking document API."""


@cli.command()
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--time-unit",
    type=click.Choice([u.value for u in TimeUnit]),
    default=None,
    help="Length of the rate-limit window.",
)
@click.option("--limit", "request_limit", type=int, default=None, help="Requests per window.")
@click.option("--url", type=str, default=None, help="Override the document endpoint.")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@click.option("--dry-run", is_flag=True, default=False, help="Print the payload, do not send.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def submit(
    document_file: str,
    time_unit: str | None,
    request_limit: int | None,
    url: str | None,
    timeout: float | None,
    dry_run: bool,
    verbose: int,
) -> None:
    """Submit the document described in DOCUMENT_FILE (YAML or JSON)."""
    from crptapi.config.loader import load_document_file
    from crptapi.core import DocumentSubmitter

    overrides = {
        "time_unit": time_unit,
        "request_limit": request_limit,
        "api_url": url,
        "timeout": timeout,
    }
    try:
        config = load_config_hierarchy(**overrides)
    except Misconfiguration as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    _setup_logging(verbose, config.get("log_level", "WARNING"))

    try:
        document = load_document_file(document_file)
        submitter = DocumentSubmitter.from_config(**overrides)
    except Misconfiguration as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    with submitter:
        if dry_run:
            request = submitter.build_request(document.description, document.products)
            click.echo(request.model_dump_json(indent=2))
            return

        try:
            result = submitter.submit(document.description, document.products)
        except RemoteRejected as e:
            error_console.print(f"[red]Rejected (HTTP {e.status_code}):[/red] {e.body}")
            sys.exit(1)
        except TransportError as e:
            error_console.print(f"[red]Transport error:[/red] {e}")
            sys.exit(1)
        except Cancelled as e:
            error_console.print(f"[yellow]Cancelled:[/yellow] {e}")
            sys.exit(1)

    console.print(f"[green]Document created[/green] (HTTP {result.status_code})")
    if result.body:
        console.print(result.body, markup=False)


@cli.command("validate")
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False))
def validate_document(document_file: str) -> None:
    """Validate a document file without submitting it."""
    from crptapi.config.loader import load_document_file

    try:
        document = load_document_file(document_file)
    except Misconfiguration as e:
        error_console.print(f"[red]Invalid document:[/red] {e}")
        sys.exit(1)

    inn = document.description.participant_inn or "-"
    console.print(f"[green]Valid document:[/green] participant {inn}")
    console.print(f"  Products: {len(document.products)}")
    for product in document.products:
        console.print(f"    - {product.uit_code or product.uitu_code or '-'}")


@cli.command("config")
def show_config() -> None:
    """Show the resolved configuration."""
    try:
        config = load_config_hierarchy()
    except Misconfiguration as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Resolved Configuration", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key in sorted(config):
        table.add_row(key, str(config[key]))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
