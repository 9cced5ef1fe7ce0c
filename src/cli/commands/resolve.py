"""
Resolve command - Resolve an emote animation id from the terminal.

Usage:
    # From a catalog URL (credential from ROBLOSECURITY)
    python -m src.cli.main resolve "https://www.roblox.com/catalog/1234567890/Emote"

    # From an explicit asset id, printing JSON
    python -m src.cli.main resolve --asset-id 1234567890 --json
"""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.common.logging import redact_secret
from src.services.animation_resolution import (
    AnimationIdResolver,
    AnimationServiceConfig,
    ResolutionError,
    ResolutionResult,
)

console = Console()


def resolve_command(
    catalog_url: str | None = typer.Argument(
        None,
        help="Catalog URL containing the asset id (optional if using --asset-id)",
    ),
    asset_id: str | None = typer.Option(
        None,
        "--asset-id",
        "-a",
        help="Explicit asset id (takes precedence over the URL)",
    ),
    prompt_credential: bool = typer.Option(
        False,
        "--prompt-credential",
        "-p",
        help="Prompt for the .ROBLOSECURITY value instead of reading ROBLOSECURITY",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Timeout in seconds for each outbound request",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON",
    ),
) -> None:
    """
    Resolve the animation id of an emote.

    Looks up the asset on Asset Delivery, downloads the first reachable CDN
    copy and prints the numeric ids found in it.
    """
    if catalog_url is None and asset_id is None:
        console.print("[red]Error:[/red] Provide either a catalog URL or --asset-id")
        raise typer.Exit(1)

    credential = None
    if prompt_credential:
        credential = typer.prompt(".ROBLOSECURITY", hide_input=True)

    overrides = {}
    if timeout:
        overrides["timeout_seconds"] = timeout
    config = AnimationServiceConfig(**overrides)

    try:
        result = asyncio.run(_resolve_async(config, catalog_url, asset_id, credential))
    except ResolutionError as e:
        message = redact_secret(redact_secret(e.message, credential), config.default_credential())
        console.print(f"[red]Error ({e.code}):[/red] {escape(message)}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict()))
        return

    _print_result(result)


async def _resolve_async(
    config: AnimationServiceConfig,
    catalog_url: str | None,
    asset_id: str | None,
    credential: str | None,
) -> ResolutionResult:
    """Async implementation of resolve command."""
    resolver = AnimationIdResolver(config)
    return await resolver.resolve(
        catalog_url=catalog_url,
        asset_id=asset_id,
        credential=credential,
    )


def _print_result(result: ResolutionResult) -> None:
    table = Table(title="Animation ID", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Input ID", result.input_id)
    table.add_row(
        "Candidate",
        f"[green]{result.animation_id_candidate}[/green]"
        if result.animation_id_candidate
        else "[yellow]none found[/yellow]",
    )
    table.add_row("All matches", ", ".join(result.all_numeric_matches) or "-")
    table.add_row("CDN locations tried", str(result.cdn_locations_tried))

    console.print(table)
