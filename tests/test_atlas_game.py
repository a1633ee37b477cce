"""Tests for the interactive Atlas console game."""

import io

from rich.console import Console

from atlas.game import AtlasGame
from atlas.session import GameSession, GameStatus
from atlas.storage import MemoryStore


class ScriptedInput:
    """Feeds prepared lines to the game, then signals end of input."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def _console():
    return Console(file=io.StringIO(), record=True, width=100, color_system=None)


class TestAtlasGame:
    """Test cases for AtlasGame."""

    def setup_method(self):
        """Setup for each test."""
        self.store = MemoryStore()
        self.session = GameSession(player_count=2, store=self.store)
        self.console = _console()

    def _play(self, lines):
        scripted = ScriptedInput(lines)
        game = AtlasGame(self.session, console=self.console, input_fn=scripted)
        game.play()
        return game, scripted, self.console.export_text()

    def test_plays_until_end_of_input(self):
        _, scripted, output = self._play(["Delhi", "Indore"])

        assert [e.name for e in self.session.entries] == ["Delhi", "Indore"]
        assert scripted.prompts == [
            "Player 1: Enter a place name: ",
            "Player 2: Enter a place starting with 'i': ",
            "Player 1: Enter a place starting with 'e': ",
        ]
        assert "Places Used (2)" in output

    def test_error_banner_until_next_success(self):
        game = AtlasGame(self.session, console=self.console, input_fn=ScriptedInput([]))

        game.handle_line("Delhi")
        game.handle_line("Paris")
        assert game.error == "Place name must start with 'i'"
        assert self.session.current_player == 2

        game.handle_line("Delhi")
        assert game.error == "This place has already been used!"

        game.handle_line("")
        assert game.error == "Please enter a place name"

        game.handle_line("Indore")
        assert game.error == ""

    def test_quit_command_stops_loop(self):
        _, scripted, _ = self._play(["Delhi", ":quit", "Indore"])
        assert len(self.session.entries) == 1
        assert scripted.lines == ["Indore"]

    def test_reset_command(self):
        _, _, output = self._play(["Delhi", ":reset", "Paris"])
        assert [e.name for e in self.session.entries] == ["Paris"]
        assert "Game reset." in output

    def test_finish_command(self):
        _, _, output = self._play(["Delhi", ":finish", "Indore"])
        assert self.session.status == GameStatus.FINISHED
        assert len(self.session.entries) == 1
        assert "Player 1 wins" in output
        assert "The game is over" in output

    def test_keyboard_interrupt_leaves_game_saved(self):
        def interrupt(prompt):
            raise KeyboardInterrupt

        self.session.submit("Delhi")
        AtlasGame(self.session, console=self.console, input_fn=interrupt).play()
        assert GameSession.load(self.store).entries[0].name == "Delhi"

    def test_places_list_numbered_and_capitalized(self):
        self.session.submit("delhi")
        self.session.submit("indore")
        game = AtlasGame(self.session, console=self.console)
        game.display()
        output = self.console.export_text()

        assert "Delhi" in output
        assert "Indore" in output
        assert "+1" in output
        assert "Player 1" in output
        assert "Player 2" in output

    def test_single_player_has_no_scoreboard(self):
        session = GameSession(player_count=1)
        session.submit("Delhi")
        game = AtlasGame(session, console=self.console)
        game.display()
        game.display_result(session.finish())
        output = self.console.export_text()

        assert "Player 1" not in output
        assert "1 places named" in output

    def test_markup_in_names_is_not_interpreted(self):
        self.session.submit("[bold]Rome")
        AtlasGame(self.session, console=self.console).display_places()
        assert "[bold]Rome" in self.console.export_text()

    def test_resumed_solo_game_shows_no_player_column(self):
        GameSession(player_count=1, store=self.store).submit("Delhi")
        session = GameSession.load(self.store, player_count=2)

        game = AtlasGame(session, console=self.console)
        game.display()
        output = self.console.export_text()

        assert "Delhi" in output
        assert "None" not in output
        assert "Player" not in output
