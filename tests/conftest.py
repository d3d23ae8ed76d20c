"""
Kniffel - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from typing import Callable, Iterable

import pytest

from kniffel.engine.base import BookingCategory
from kniffel.engine.game import KniffelGame


class ScriptedRandom(random.Random):
    """random.Random that deals out queued die values before falling back to a seed."""

    def __init__(self, values: Iterable[int] = (), seed: int = 0) -> None:
        super().__init__(seed)
        self.queue = list(values)

    def randint(self, a: int, b: int) -> int:
        if self.queue:
            return self.queue.pop(0)
        return super().randint(a, b)

    def push(self, *values: int) -> None:
        self.queue.extend(values)


# =============================================================================
# RANDOMNESS
# =============================================================================

@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """Factory for a random source that yields the given dice first."""
    return ScriptedRandom


@pytest.fixture
def make_game(scripted_rng) -> Callable[..., KniffelGame]:
    """
    Factory for a game whose dice are dealt from a script.

    Usage: make_game([5, 5, 5, 1, 2], [1, 2, 3, 4, 6], players=("oli", "mike"))
    Each list is one roll; reroll lists only need the rerolled dice.
    """
    def _make(*rolls: Iterable[int], players=("oli", "mike")) -> KniffelGame:
        values = [v for roll in rolls for v in roll]
        return KniffelGame(list(players), rng=scripted_rng(values))
    return _make


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def category_scores_55512() -> dict[BookingCategory, int]:
    """Expected score of (5, 5, 5, 1, 2) in every category."""
    return {
        BookingCategory.ONES: 1,
        BookingCategory.TWOS: 2,
        BookingCategory.THREES: 0,
        BookingCategory.FOURS: 0,
        BookingCategory.FIVES: 15,
        BookingCategory.SIXES: 0,
        BookingCategory.THREE_OF_A_KIND: 18,
        BookingCategory.FOUR_OF_A_KIND: 0,
        BookingCategory.FULL_HOUSE: 0,
        BookingCategory.SMALL_STRAIGHT: 0,
        BookingCategory.LARGE_STRAIGHT: 0,
        BookingCategory.KNIFFEL: 0,
        BookingCategory.CHANCE: 18,
    }


@pytest.fixture
def special_rolls() -> dict[str, tuple[tuple[int, ...], dict[BookingCategory, int]]]:
    """
    Rolls with notable lower-section results.

    Returns:
        Dict mapping name to (dice_values, {category: expected_points})
    """
    return {
        "five_sixes": ((6, 6, 6, 6, 6), {
            BookingCategory.THREE_OF_A_KIND: 30,
            BookingCategory.FOUR_OF_A_KIND: 30,
            BookingCategory.FULL_HOUSE: 0,
            BookingCategory.KNIFFEL: 50,
            BookingCategory.SIXES: 30,
        }),
        "full_house": ((2, 3, 2, 3, 3), {
            BookingCategory.FULL_HOUSE: 25,
            BookingCategory.THREE_OF_A_KIND: 13,
            BookingCategory.FOUR_OF_A_KIND: 0,
        }),
        "low_large_straight": ((5, 3, 1, 4, 2), {
            BookingCategory.SMALL_STRAIGHT: 30,
            BookingCategory.LARGE_STRAIGHT: 40,
            BookingCategory.CHANCE: 15,
        }),
    }
