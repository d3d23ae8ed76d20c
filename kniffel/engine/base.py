"""
Kniffel - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Game state is held in frozen dataclasses: every operation
computes a new state and the owning game swaps it in as a single assignment.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

from kniffel.engine.errors import InvalidCategoryError

DIE_FACES = 6
NUM_DICE = 5
MAX_ROLL_ROUNDS = 3


class BookingCategory(Enum):
    """The 13 scoring slots, in scorecard order."""
    ONES = "ones"
    TWOS = "twos"
    THREES = "threes"
    FOURS = "fours"
    FIVES = "fives"
    SIXES = "sixes"
    THREE_OF_A_KIND = "three_of_a_kind"
    FOUR_OF_A_KIND = "four_of_a_kind"
    FULL_HOUSE = "full_house"
    SMALL_STRAIGHT = "small_straight"
    LARGE_STRAIGHT = "large_straight"
    KNIFFEL = "kniffel"
    CHANCE = "chance"

    @property
    def upper_value(self) -> int | None:
        """Face value counted by an upper-section category, else None."""
        return _UPPER_VALUES.get(self)

    @classmethod
    def parse(cls, value: "BookingCategory | str") -> "BookingCategory":
        """
        Resolve a category from a member, its name or its value.

        Matching is case-insensitive and accepts dashes or spaces in place
        of underscores ("Full House", "three-of-a-kind").

        Raises:
            InvalidCategoryError: If nothing matches
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            for category in cls:
                if category.value == key:
                    return category
        raise InvalidCategoryError(f"Unknown booking category: {value!r}.")


_UPPER_VALUES: dict[BookingCategory, int] = {
    BookingCategory.ONES: 1,
    BookingCategory.TWOS: 2,
    BookingCategory.THREES: 3,
    BookingCategory.FOURS: 4,
    BookingCategory.FIVES: 5,
    BookingCategory.SIXES: 6,
}

ALL_CATEGORIES: tuple[BookingCategory, ...] = tuple(BookingCategory)


class GamePhase(Enum):
    """Sub-state of a turn."""
    ROLLING = "rolling"   # rerolls allowed, booking allowed
    BOOKING = "booking"   # third roll shown, must book


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of the five dice on the table.

    Attributes:
        values: Tuple of exactly five face values, in table position order
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice count and face range."""
        if len(self.values) != NUM_DICE:
            raise ValueError(
                f"A roll has exactly {NUM_DICE} dice, got {len(self.values)}."
            )
        for value in self.values:
            if not (1 <= value <= DIE_FACES):
                raise ValueError(
                    f"Invalid die value {value}. Must be between 1 and {DIE_FACES}."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DiceRoll":
        """Create a DiceRoll from any sequence type."""
        return cls(values=tuple(values))


@dataclass(frozen=True)
class PlayerState:
    """
    A player's scorecard.

    Attributes:
        name: Unique, case-sensitive player name
        score: Running total of all booked points
        used_categories: Categories already booked this game
    """
    name: str
    score: int = 0
    used_categories: frozenset[BookingCategory] = field(default_factory=frozenset)

    @property
    def available_categories(self) -> tuple[BookingCategory, ...]:
        """Unbooked categories in declaration order."""
        return tuple(c for c in ALL_CATEGORIES if c not in self.used_categories)

    @property
    def is_complete(self) -> bool:
        """True once every category has been booked."""
        return len(self.used_categories) == len(ALL_CATEGORIES)

    def with_booking(self, category: BookingCategory, points: int) -> "PlayerState":
        """Return a copy with the category consumed and points added."""
        return replace(
            self,
            score=self.score + points,
            used_categories=self.used_categories | {category},
        )


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a Kniffel game.

    Attributes:
        players: Players in fixed turn order
        dice: The current roll
        roll_round: 1 for the initial roll, 2 and 3 for rerolls
        current_player_index: Index into players of the acting player
        phase: ROLLING or BOOKING
        finished: True once every player has booked all categories
    """
    players: tuple[PlayerState, ...]
    dice: DiceRoll
    roll_round: int = 1
    current_player_index: int = 0
    phase: GamePhase = GamePhase.ROLLING
    finished: bool = False

    def __post_init__(self) -> None:
        if not (1 <= self.roll_round <= MAX_ROLL_ROUNDS):
            raise ValueError(
                f"Roll round must be between 1 and {MAX_ROLL_ROUNDS}, got {self.roll_round}."
            )
        if not (0 <= self.current_player_index < len(self.players)):
            raise ValueError(
                f"Current player index {self.current_player_index} is out of range."
            )

    @property
    def current_player(self) -> PlayerState:
        """The player whose turn it is."""
        return self.players[self.current_player_index]

    @property
    def can_reroll(self) -> bool:
        """Whether a reroll is legal right now."""
        return not self.finished and self.phase == GamePhase.ROLLING
