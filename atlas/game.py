"""Interactive console front end for Atlas."""

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from atlas.errors import ValidationError
from atlas.session import GameSession, GameStatus

logger = logging.getLogger(__name__)

RESET_COMMAND = ":reset"
FINISH_COMMAND = ":finish"
QUIT_COMMANDS = {":quit", ":q"}


class AtlasGame:
    """Runs a session against a terminal.

    Every line typed is a submission except the `:reset`, `:finish` and
    `:quit` commands. A rejected submission shows an error banner that stays
    up until the next accepted place.
    """

    def __init__(
        self,
        session: GameSession,
        console: Optional[Console] = None,
        input_fn: Optional[Callable[[str], str]] = None,
    ):
        self.session = session
        self.console = console or Console()
        self.input_fn = input_fn or self.console.input
        self.error: str = ""

    # ---- display ----

    def display_scores(self):
        """Show each player's score with the current turn highlighted."""
        if not self.session.is_two_player:
            return

        table = Table(show_header=False, show_lines=True)
        scores = self.session.scores
        cells = []
        for player in (1, 2):
            table.add_column(justify="center", min_width=16)
            label = f"Player {player}\n🏆 {scores[player]}"
            if player == self.session.current_player and self.session.status != GameStatus.FINISHED:
                cells.append(f"[bold black on bright_blue]{label}[/bold black on bright_blue]")
            else:
                cells.append(label)
        table.add_row(*cells)
        self.console.print(table)

    def display_places(self):
        """Show the numbered list of places used so far."""
        entries = self.session.entries
        self.console.print(f"\n[bold]Places Used ({len(entries)})[/bold]")
        if not entries:
            self.console.print("[dim]No places yet[/dim]")
            return

        table = Table(show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Place", style="cyan")
        if self.session.is_two_player:
            table.add_column("Player", justify="center")
        table.add_column("Points", justify="right", style="green")

        for index, entry in enumerate(entries, start=1):
            row = [str(index), escape(entry.name[:1].upper() + entry.name[1:])]
            if self.session.is_two_player:
                row.append(str(entry.player) if entry.player is not None else "")
            row.append(f"+{entry.points}")
            table.add_row(*row)
        self.console.print(table)

    def display_error(self):
        if self.error:
            self.console.print(Panel(escape(self.error), style="bold red", expand=False))

    def display(self):
        """Render the whole game screen."""
        self.console.rule("[bold]Atlas Game[/bold]")
        self.display_scores()
        self.display_places()
        self.display_error()

    def display_result(self, winner: Optional[int]):
        if not self.session.is_two_player:
            self.console.print(f"[bold]Game over![/bold] {len(self.session.entries)} places named.")
        elif winner is None:
            self.console.print("[bold]Game over![/bold] It's a tie.")
        else:
            self.console.print(f"[bold green]Game over! Player {winner} wins.[/bold green]")

    # ---- input handling ----

    def handle_line(self, line: str) -> bool:
        """Apply one line of input. Returns False when the player quits."""
        command = line.strip().lower()

        if command in QUIT_COMMANDS:
            return False

        if command == RESET_COMMAND:
            self.session.reset()
            self.error = ""
            self.console.print("[yellow]Game reset.[/yellow]")
            return True

        if command == FINISH_COMMAND:
            self.error = ""
            self.display_result(self.session.finish())
            return True

        try:
            entry = self.session.submit(line)
        except ValidationError as e:
            self.error = str(e)
            return True

        self.error = ""
        self.console.print(f"[green]✓ {escape(entry.name)} accepted (+{entry.points})[/green]")
        return True

    def play(self) -> GameSession:
        """Prompt for places until the player quits or input ends."""
        self.console.print("[bold]🌍 Atlas Game[/bold]")
        self.console.print(
            f"[dim]Commands: {RESET_COMMAND} to start over, {FINISH_COMMAND} to end the game, "
            f":quit to leave (progress is saved)[/dim]"
        )

        while True:
            self.display()
            try:
                line = self.input_fn(escape(f"{self.session.prompt()}: "))
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.handle_line(line):
                break

        logger.info(f"Leaving game with {len(self.session.entries)} places")
        return self.session
