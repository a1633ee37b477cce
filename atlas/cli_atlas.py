"""CLI subcommand for the Atlas game."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from atlas.config import AtlasConfig, load_config
from atlas.errors import ConfigError, ValidationError
from atlas.game import AtlasGame
from atlas.session import GameSession
from atlas.storage import JsonFileStore
from atlas.utils.logging import setup_logging

app = typer.Typer(help="Play Atlas, the place-name chaining game")
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to YAML config file (default: ./atlas.yml if present)")
PLAYERS_OPTION = typer.Option(None, "--players", "-p", help="Number of players: 1 (list only) or 2 (turns and scores)")
STATE_FILE_OPTION = typer.Option(None, "--state-file", envvar="ATLAS_STATE_FILE", help="JSON file the game is saved to")
KEY_OPTION = typer.Option(None, "--key", help="Storage key for the saved game")
LOG_PATH_OPTION = typer.Option(None, "--log-path", help="Directory for log files")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


def _resolve_config(
    config_file: Optional[str],
    players: Optional[int],
    state_file: Optional[str],
    key: Optional[str],
    log_path: Optional[str],
) -> AtlasConfig:
    """Load the config file and apply command-line overrides."""
    try:
        config = load_config(config_file)
        return config.with_overrides(
            player_count=players,
            state_file=state_file,
            storage_key=key,
            log_path=log_path,
        )
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _open_session(
    config_file: Optional[str],
    players: Optional[int],
    state_file: Optional[str],
    key: Optional[str],
    log_path: Optional[str],
    verbose: bool,
) -> Tuple[AtlasConfig, GameSession]:
    config = _resolve_config(config_file, players, state_file, key, log_path)
    setup_logging(Path(config.log_path), verbose)

    logger = logging.getLogger(__name__)
    logger.debug(f"Using config: {config.to_dict()}")

    session = GameSession.load(
        JsonFileStore(config.state_file),
        player_count=config.player_count,
        storage_key=config.storage_key,
        points_per_entry=config.points_per_entry,
    )
    return config, session


@app.command()
def play(
    config_file: Optional[str] = CONFIG_OPTION,
    players: Optional[int] = PLAYERS_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Play interactively in the terminal.

    Type a place name and press Enter. Each place must start with the last
    letter of the previous one and can be used only once per game.

    Commands: :reset starts over, :finish ends the game, :quit leaves.
    The game is saved after every accepted place.
    """
    _, session = _open_session(config_file, players, state_file, key, log_path, verbose)
    AtlasGame(session, console=console).play()


@app.command()
def submit(
    place: str = typer.Argument(..., help="Place name to submit"),
    config_file: Optional[str] = CONFIG_OPTION,
    players: Optional[int] = PLAYERS_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Submit one place to the saved game and exit.

    Exits with status 1 if the place is rejected.
    """
    _, session = _open_session(config_file, players, state_file, key, log_path, verbose)
    player = session.current_player

    try:
        entry = session.submit(place)
    except ValidationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if session.is_two_player:
        console.print(f"[green]✓ Player {player}: {escape(entry.name)} (+{entry.points})[/green]")
    else:
        console.print(f"[green]✓ {escape(entry.name)} (+{entry.points})[/green]")
    console.print(escape(session.prompt()))


@app.command()
def show(
    config_file: Optional[str] = CONFIG_OPTION,
    players: Optional[int] = PLAYERS_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Show the saved game."""
    _, session = _open_session(config_file, players, state_file, key, log_path, verbose)
    AtlasGame(session, console=console).display()
    console.print(f"[dim]Status: {session.status.value}[/dim]")


@app.command()
def finish(
    config_file: Optional[str] = CONFIG_OPTION,
    players: Optional[int] = PLAYERS_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """End the saved game and announce the winner."""
    _, session = _open_session(config_file, players, state_file, key, log_path, verbose)
    game = AtlasGame(session, console=console)
    game.display_result(session.finish())


@app.command()
def reset(
    config_file: Optional[str] = CONFIG_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Delete the saved game."""
    _, session = _open_session(config_file, None, state_file, key, log_path, verbose)
    session.reset()
    console.print("[yellow]Game reset.[/yellow]")


@app.command(name="config")
def show_config(
    config_file: Optional[str] = CONFIG_OPTION,
    players: Optional[int] = PLAYERS_OPTION,
    state_file: Optional[str] = STATE_FILE_OPTION,
    key: Optional[str] = KEY_OPTION,
    log_path: Optional[str] = LOG_PATH_OPTION,
):
    """Print the effective configuration."""
    config = _resolve_config(config_file, players, state_file, key, log_path)

    table = Table(title="Atlas Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in config.to_dict().items():
        table.add_row(name, escape(str(value)))
    console.print(table)
