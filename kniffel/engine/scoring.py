"""
Kniffel - Scoring Rules

Pure functions mapping five dice to points. Every function accepts either a
DiceRoll or a plain sequence of five values.

Scoring Rules:
    - Ones .. Sixes: count of that face × face value
    - Three / Four of a kind: sum of all five dice if some face shows
      at least 3 / 4 times
    - Full house: 25 for exactly one pair plus one triple
    - Small straight: 30 for four consecutive faces
    - Large straight: 40 for five consecutive faces
    - Kniffel: 50 for five of a kind
    - Chance: sum of all five dice

Five of a kind is not a full house (its multiplicities are {5}, not {2, 3}),
but it does count for three and four of a kind.
"""

from collections import Counter
from typing import Sequence

from kniffel.engine.base import ALL_CATEGORIES, DIE_FACES, BookingCategory, DiceRoll
from kniffel.engine.validators import validate_dice_values

FULL_HOUSE_POINTS = 25
SMALL_STRAIGHT_POINTS = 30
LARGE_STRAIGHT_POINTS = 40
KNIFFEL_POINTS = 50

SMALL_STRAIGHTS = (
    frozenset({1, 2, 3, 4}),
    frozenset({2, 3, 4, 5}),
    frozenset({3, 4, 5, 6}),
)
LARGE_STRAIGHTS = (
    frozenset({1, 2, 3, 4, 5}),
    frozenset({2, 3, 4, 5, 6}),
)


def _values(dice: DiceRoll | Sequence[int]) -> tuple[int, ...]:
    if isinstance(dice, DiceRoll):
        return dice.values
    return validate_dice_values(dice)


def score_upper_section(dice: DiceRoll | Sequence[int], value: int) -> int:
    """
    Score an upper-section category (Ones through Sixes).

    Args:
        dice: The roll to score
        value: Face value counted (1-6)

    Returns:
        Number of dice showing value, times value
    """
    if not (1 <= value <= DIE_FACES):
        raise ValueError(f"Upper section value must be 1-{DIE_FACES}, got {value}.")
    return _values(dice).count(value) * value


def score_of_a_kind(dice: DiceRoll | Sequence[int], k: int) -> int:
    """
    Score three or four of a kind.

    Args:
        dice: The roll to score
        k: Minimum multiplicity required

    Returns:
        Sum of all five dice if any face appears at least k times, else 0
    """
    if k < 1:
        raise ValueError(f"Multiplicity must be positive, got {k}.")
    values = _values(dice)
    _, highest = Counter(values).most_common(1)[0]
    return sum(values) if highest >= k else 0


def score_full_house(dice: DiceRoll | Sequence[int]) -> int:
    """25 points if the multiplicities are exactly one pair and one triple."""
    multiplicities = sorted(Counter(_values(dice)).values())
    return FULL_HOUSE_POINTS if multiplicities == [2, 3] else 0


def score_small_straight(dice: DiceRoll | Sequence[int]) -> int:
    """30 points if the distinct faces contain four in a row."""
    distinct = set(_values(dice))
    if any(straight <= distinct for straight in SMALL_STRAIGHTS):
        return SMALL_STRAIGHT_POINTS
    return 0


def score_large_straight(dice: DiceRoll | Sequence[int]) -> int:
    """40 points if the dice are 1-5 or 2-6."""
    distinct = frozenset(_values(dice))
    return LARGE_STRAIGHT_POINTS if distinct in LARGE_STRAIGHTS else 0


def score_kniffel(dice: DiceRoll | Sequence[int]) -> int:
    """50 points for five of a kind."""
    return KNIFFEL_POINTS if len(set(_values(dice))) == 1 else 0


def score_chance(dice: DiceRoll | Sequence[int]) -> int:
    """Sum of all dice, unconditionally."""
    return sum(_values(dice))


def score_category(dice: DiceRoll | Sequence[int], category: BookingCategory) -> int:
    """
    Score a roll for one booking category.

    Args:
        dice: The roll to score
        category: Category to score against

    Returns:
        Points the roll is worth in that category
    """
    if category.upper_value is not None:
        return score_upper_section(dice, category.upper_value)
    if category == BookingCategory.THREE_OF_A_KIND:
        return score_of_a_kind(dice, 3)
    if category == BookingCategory.FOUR_OF_A_KIND:
        return score_of_a_kind(dice, 4)
    if category == BookingCategory.FULL_HOUSE:
        return score_full_house(dice)
    if category == BookingCategory.SMALL_STRAIGHT:
        return score_small_straight(dice)
    if category == BookingCategory.LARGE_STRAIGHT:
        return score_large_straight(dice)
    if category == BookingCategory.KNIFFEL:
        return score_kniffel(dice)
    if category == BookingCategory.CHANCE:
        return score_chance(dice)
    raise ValueError(f"Unhandled booking category: {category!r}")


def score_preview(
    dice: DiceRoll | Sequence[int],
    used: frozenset[BookingCategory] | set[BookingCategory] = frozenset()
) -> dict[BookingCategory, int]:
    """
    Points the roll would score in every category not yet used.

    Returns:
        Dict in category declaration order
    """
    values = _values(dice)
    return {
        category: score_category(values, category)
        for category in ALL_CATEGORIES
        if category not in used
    }
