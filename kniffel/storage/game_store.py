"""
Kniffel - Game Store

Maps opaque game ids to live KniffelGame objects. The engine never sees the
ids; callers reach games only through a GameStore.
"""

import threading
from typing import Iterator, Protocol

from kniffel.engine.game import KniffelGame


class GameNotFoundError(KeyError):
    """No game is stored under the requested id."""


class GameStore(Protocol):
    """Narrow key-value interface for game storage."""

    def get(self, game_id: str) -> KniffelGame: ...

    def put(self, game_id: str, game: KniffelGame) -> None: ...

    def remove(self, game_id: str) -> None: ...

    def __contains__(self, game_id: object) -> bool: ...

    def __len__(self) -> int: ...


class InMemoryGameStore:
    """Thread-safe dict-backed GameStore."""

    def __init__(self) -> None:
        self._games: dict[str, KniffelGame] = {}
        self._lock = threading.Lock()

    def get(self, game_id: str) -> KniffelGame:
        """Fetch a game by id.

        Raises:
            GameNotFoundError: If the id is unknown.
        """
        with self._lock:
            try:
                return self._games[game_id]
            except KeyError:
                raise GameNotFoundError(game_id) from None

    def put(self, game_id: str, game: KniffelGame) -> None:
        """Store a game, replacing any game under the same id."""
        with self._lock:
            self._games[game_id] = game

    def remove(self, game_id: str) -> None:
        """Delete a game.

        Raises:
            GameNotFoundError: If the id is unknown.
        """
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._games)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._games

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())
