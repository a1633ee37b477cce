"""Core game state for Atlas.

A session holds the ordered list of accepted places and everything derived
from it: the set of used names, the chain letter, whose turn it is and the
per-player scores. All mutation goes through `submit`, `finish` and `reset`.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from atlas.errors import (
    ChainMismatch,
    CorruptState,
    DuplicateEntry,
    EmptyInput,
    GameFinished,
)
from atlas.storage import SnapshotStore

logger = logging.getLogger(__name__)

PLAYERS = (1, 2)


class GameStatus(Enum):
    """Session phase."""
    WAITING = "waiting"    # No entry accepted yet
    PLAYING = "playing"
    FINISHED = "finished"  # Only reached through finish()


@dataclass
class Entry:
    """One accepted place name."""
    name: str
    points: int = 1
    player: Optional[int] = None  # None in single-player games

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "points": self.points}
        if self.player is not None:
            data["player"] = self.player
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        name = data["name"]
        points = data.get("points", 1)
        player = data.get("player")
        if not isinstance(name, str) or not name:
            raise ValueError(f"entry name must be a non-empty string, got {name!r}")
        if not isinstance(points, int) or isinstance(points, bool):
            raise ValueError(f"entry points must be an integer, got {points!r}")
        if player is not None and player not in PLAYERS:
            raise ValueError(f"entry player must be 1 or 2, got {player!r}")
        return cls(name=name, points=points, player=player)


@dataclass
class Snapshot:
    """Full session state as persisted between runs."""
    places: List[Entry] = field(default_factory=list)
    scores: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})
    current_player: int = 1
    status: GameStatus = GameStatus.WAITING
    last_letter: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the stored field names."""
        return {
            "places": [entry.to_dict() for entry in self.places],
            "scores": {f"player{p}": self.scores.get(p, 0) for p in PLAYERS},
            "currentPlayer": self.current_player,
            "gameState": self.status.value,
            "lastLetter": self.last_letter,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Snapshot":
        """Decode a stored snapshot.

        Raises:
            CorruptState: if any field is missing or has the wrong shape
        """
        try:
            places = [Entry.from_dict(item) for item in data["places"]]
            raw_scores = data["scores"]
            scores = {p: raw_scores[f"player{p}"] for p in PLAYERS}
            if not all(isinstance(s, int) and not isinstance(s, bool) for s in scores.values()):
                raise ValueError(f"scores must be integers, got {raw_scores!r}")

            current_player = data["currentPlayer"]
            if current_player not in PLAYERS:
                raise ValueError(f"currentPlayer must be 1 or 2, got {current_player!r}")

            status = GameStatus(data["gameState"])

            last_letter = data["lastLetter"]
            if not isinstance(last_letter, str) or len(last_letter) > 1:
                raise ValueError(f"lastLetter must be a single character, got {last_letter!r}")
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptState(f"Malformed snapshot: {e}") from e

        return cls(
            places=places,
            scores=scores,
            current_player=current_player,
            status=status,
            last_letter=last_letter,
        )


class GameSession:
    """A single Atlas game.

    Players take turns naming places. Each place must start with the last
    letter of the previous one and may be used only once per game (compared
    case-insensitively). With `player_count=2` turns alternate and every
    accepted place scores for the player who named it; with `player_count=1`
    the session only keeps the list.

    When a store is given the full state is written after every accepted
    place and removed on reset.
    """

    STORAGE_KEY = "atlas_game_state"

    def __init__(
        self,
        player_count: int = 2,
        store: Optional[SnapshotStore] = None,
        storage_key: str = STORAGE_KEY,
        points_per_entry: int = 1,
    ):
        if player_count not in (1, 2):
            raise ValueError(f"player_count must be 1 or 2, got {player_count}")

        self.player_count = player_count
        self.store = store
        self.storage_key = storage_key
        self.points_per_entry = points_per_entry

        self._entries: List[Entry] = []
        self._used_names: set = set()
        self._last_letter = ""
        self._current_player = 1
        self._scores: Dict[int, int] = {1: 0, 2: 0}
        self.status = GameStatus.WAITING

    @classmethod
    def load(
        cls,
        store: SnapshotStore,
        player_count: int = 2,
        storage_key: str = STORAGE_KEY,
        points_per_entry: int = 1,
    ) -> "GameSession":
        """Create a session, resuming from the stored snapshot if there is one.

        A snapshot that cannot be decoded is logged and ignored; the result
        is then a fresh session. The bad snapshot stays in the store until
        the next save or reset replaces it.
        """
        session = cls(
            player_count=player_count,
            store=store,
            storage_key=storage_key,
            points_per_entry=points_per_entry,
        )

        raw = store.get(storage_key)
        if raw is None:
            logger.debug(f"No saved game under '{storage_key}', starting fresh")
            return session

        try:
            snapshot = Snapshot.from_dict(raw)
        except CorruptState as e:
            logger.warning(f"{e}; starting a new game")
            return session

        session.restore(snapshot)
        logger.info(f"Resumed game with {len(session._entries)} places")
        return session

    # ---- read-only views ----

    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)

    @property
    def used_names(self) -> FrozenSet[str]:
        """Lowercased names of all accepted entries."""
        return frozenset(self._used_names)

    @property
    def last_letter(self) -> str:
        return self._last_letter

    @property
    def current_player(self) -> int:
        return self._current_player

    @property
    def scores(self) -> Dict[int, int]:
        return dict(self._scores)

    @property
    def is_two_player(self) -> bool:
        return self.player_count == 2

    def prompt(self) -> str:
        """Input hint for whoever is about to play."""
        if self._last_letter:
            text = f"Enter a place starting with '{self._last_letter}'"
        else:
            text = "Enter a place name"
        if self.is_two_player:
            return f"Player {self._current_player}: {text}"
        return text

    def winner(self) -> Optional[int]:
        """Player with the higher score, or None for a tie or solo game."""
        if not self.is_two_player or self._scores[1] == self._scores[2]:
            return None
        return 1 if self._scores[1] > self._scores[2] else 2

    # ---- state transitions ----

    def submit(self, raw_input: str) -> Entry:
        """Validate a place name and add it to the game.

        Checks run in a fixed order, so when several rules are broken the
        first one listed wins: finished game, empty input, duplicate,
        wrong starting letter. State is untouched when a check fails and
        the same player keeps the turn.

        Returns:
            The accepted Entry

        Raises:
            GameFinished, EmptyInput, DuplicateEntry, ChainMismatch
        """
        if self.status == GameStatus.FINISHED:
            raise GameFinished()

        candidate = (raw_input or "").strip()
        if not candidate:
            logger.debug("Rejected empty submission")
            raise EmptyInput()

        folded = candidate.lower()
        if folded in self._used_names:
            logger.debug(f"Rejected duplicate '{candidate}'")
            raise DuplicateEntry(candidate)

        if self._last_letter and candidate[0].lower()[:1] != self._last_letter.lower():
            logger.debug(f"Rejected '{candidate}': expected '{self._last_letter}'")
            raise ChainMismatch(self._last_letter)

        player = self._current_player if self.is_two_player else None
        entry = Entry(name=candidate, points=self.points_per_entry, player=player)

        self._entries.append(entry)
        self._used_names.add(folded)
        self._last_letter = candidate[-1].lower()[:1]
        if self.is_two_player:
            self._scores[player] += entry.points
            self._current_player = 2 if player == 1 else 1
        self.status = GameStatus.PLAYING

        logger.info(f"Accepted '{candidate}' (place #{len(self._entries)}, player={player})")
        self.save()
        return entry

    def finish(self) -> Optional[int]:
        """End the game and return the winner (see `winner`)."""
        self.status = GameStatus.FINISHED
        winner = self.winner()
        logger.info(f"Game finished after {len(self._entries)} places, winner={winner}")
        self.save()
        return winner

    def reset(self) -> None:
        """Clear all state and delete the stored snapshot."""
        self._entries = []
        self._used_names = set()
        self._last_letter = ""
        self._current_player = 1
        self._scores = {1: 0, 2: 0}
        self.status = GameStatus.WAITING

        if self.store is not None:
            self.store.delete(self.storage_key)
        logger.info("Game reset")

    # ---- persistence ----

    def snapshot(self) -> Snapshot:
        return Snapshot(
            places=list(self._entries),
            scores=dict(self._scores),
            current_player=self._current_player,
            status=self.status,
            last_letter=self._last_letter,
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the session state with a snapshot's contents.

        The player count follows the saved places: entries carrying a player
        mean a two-player game, entries without one a solo game. A mismatch
        with the configured count is logged and the saved mode wins.
        """
        if snapshot.places:
            saved_count = 2 if any(e.player is not None for e in snapshot.places) else 1
            if saved_count != self.player_count:
                logger.warning(
                    f"Saved game has {saved_count} player(s) but {self.player_count} were requested; "
                    f"continuing the saved {saved_count}-player game"
                )
                self.player_count = saved_count

        self._entries = list(snapshot.places)
        self._used_names = {entry.name.lower() for entry in self._entries}
        self._last_letter = snapshot.last_letter
        self._current_player = snapshot.current_player
        self._scores = dict(snapshot.scores)
        self.status = snapshot.status

    def save(self) -> None:
        if self.store is None:
            return
        self.store.put(self.storage_key, self.snapshot().to_dict())
        logger.debug(f"Saved game under '{self.storage_key}'")
