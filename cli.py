"""Command-line interface for Wordchain - word-chaining games.

This is the unified CLI entry point:
- `wordchain atlas` - Play Atlas (place names, each starting with the last letter of the previous)
- `wordchain version` - Show version information
"""

import typer
from rich.console import Console

from atlas.cli_atlas import app as atlas_app

# Main application
app = typer.Typer(
    help="Wordchain - word-chaining games for the terminal",
    no_args_is_help=True,
)
console = Console()

# Register subcommands
app.add_typer(atlas_app, name="atlas", help="Play Atlas, the place-name chaining game")


@app.callback()
def main():
    """Wordchain - word-chaining games for the terminal.

    Examples:

        # Two players taking turns at one keyboard
        wordchain atlas play

        # Solo game
        wordchain atlas play --players 1

        # Script a game one place at a time
        wordchain atlas submit Delhi
        wordchain atlas submit Indore
        wordchain atlas show
        wordchain atlas reset
    """
    pass


@app.command()
def version():
    """Show version information."""
    from atlas import __version__ as atlas_version

    console.print("[bold]Wordchain[/bold]")
    console.print(f"  atlas: {atlas_version}")


if __name__ == "__main__":
    app()
