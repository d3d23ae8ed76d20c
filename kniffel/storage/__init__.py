"""
Kniffel Storage Layer.

In-memory game store and the game manager facade used by request handlers.
"""

from kniffel.storage.game_manager import GameManager
from kniffel.storage.game_store import GameNotFoundError, GameStore, InMemoryGameStore

__all__ = [
    "GameManager",
    "GameNotFoundError",
    "GameStore",
    "InMemoryGameStore",
]
