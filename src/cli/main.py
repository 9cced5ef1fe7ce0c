"""
Animation Resolver CLI

Entry point for the command-line interface.

Usage:
    python -m src.cli.main resolve "https://www.roblox.com/catalog/1234567890/Emote"
    python -m src.cli.main --help
"""

import typer

from src.cli.commands.resolve import resolve_command

app = typer.Typer(
    name="animation-resolver",
    help="Resolve Roblox emote catalog items to animation ids",
    no_args_is_help=True,
)

# Register commands
app.command(name="resolve", help="Resolve the animation id of an emote")(resolve_command)


@app.command()
def version() -> None:
    """Show version information."""
    from src import __version__
    typer.echo(f"animation-resolver version {__version__}")


if __name__ == "__main__":
    app()
