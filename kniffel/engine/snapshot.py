"""
Kniffel - Game Snapshots

Pydantic models describing a game's observable state, ready for the request
layer to serialize with model_dump() or model_dump_json().
"""

from pydantic import BaseModel, Field

from kniffel.engine.base import BookingCategory, GamePhase


class PlayerSnapshot(BaseModel):
    """One player's scorecard as seen from outside."""

    name: str
    score: int = 0
    used_categories: list[BookingCategory] = Field(default_factory=list)

    model_config = {"frozen": True}


class GameSnapshot(BaseModel):
    """Everything a caller may read about a game."""

    players: list[PlayerSnapshot]
    current_player_name: str
    phase: GamePhase
    available_categories: list[BookingCategory] = Field(default_factory=list)
    dice_rolls: list[int] = Field(min_length=5, max_length=5)
    roll_round: int = Field(ge=1, le=3)
    finished: bool = False

    model_config = {"frozen": True}

    def player(self, name: str) -> PlayerSnapshot:
        """Look up a player by name."""
        for player in self.players:
            if player.name == name:
                return player
        raise KeyError(name)
