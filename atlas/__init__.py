"""Atlas: a word-chaining game of place names.

Players take turns naming places. Each name must start with the last letter
of the previous one and cannot repeat a place already used this game.
- One player: the game keeps the running list
- Two players: turns alternate and each accepted place scores 1 point
- The game is saved after every accepted place and resumes on next start
"""

from atlas.session import Entry, GameSession, GameStatus, Snapshot

__version__ = "0.1.0"

__all__ = ["Entry", "GameSession", "GameStatus", "Snapshot"]
