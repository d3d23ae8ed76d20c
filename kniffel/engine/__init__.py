"""
Kniffel Game Engine.

Pure Python game logic with zero UI/storage dependencies.
Handles dice rolling, keep/reroll, category scoring and turn order.
"""

from kniffel.engine.base import (
    ALL_CATEGORIES,
    BookingCategory,
    DiceRoll,
    GamePhase,
    GameState,
    PlayerState,
)
from kniffel.engine.errors import (
    CategoryAlreadyUsedError,
    IllegalPhaseError,
    InvalidCategoryError,
    InvalidKeepError,
    InvalidPlayersError,
    KniffelError,
    NotPlayersTurnError,
)
from kniffel.engine.events import EventPayload, GameEvent
from kniffel.engine.game import KniffelGame, book, create_game, reroll, snapshot
from kniffel.engine.kniffel import KniffelEngine
from kniffel.engine.snapshot import GameSnapshot, PlayerSnapshot

__all__ = [
    # Data Classes
    "DiceRoll",
    "GameState",
    "PlayerState",
    "GameSnapshot",
    "PlayerSnapshot",
    "EventPayload",
    # Enums
    "BookingCategory",
    "GamePhase",
    "GameEvent",
    "ALL_CATEGORIES",
    # Errors
    "KniffelError",
    "InvalidPlayersError",
    "IllegalPhaseError",
    "NotPlayersTurnError",
    "InvalidKeepError",
    "CategoryAlreadyUsedError",
    "InvalidCategoryError",
    # Engine
    "KniffelEngine",
    "KniffelGame",
    "create_game",
    "reroll",
    "book",
    "snapshot",
]
