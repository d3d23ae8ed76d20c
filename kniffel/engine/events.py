"""
Kniffel - Game Event Definitions

Event types and payloads recorded by a game as it is played.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_CREATED = auto()
    DICE_ROLLED = auto()
    DICE_KEPT = auto()
    CATEGORY_BOOKED = auto()
    TURN_ADVANCED = auto()
    GAME_FINISHED = auto()


@dataclass(frozen=True)
class EventPayload:
    """Wrapper for game event data."""

    event: GameEvent
    player_name: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


def rolled(player_name: str, dice: tuple[int, ...], roll_round: int) -> EventPayload:
    return EventPayload(
        event=GameEvent.DICE_ROLLED,
        player_name=player_name,
        data={"dice": list(dice), "roll_round": roll_round},
    )
