"""
Kniffel - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive exceptions
(ValueError or one of its KniffelError subclasses).
"""

from collections import Counter
from typing import Iterable, Sequence

from kniffel.engine.base import DIE_FACES, NUM_DICE
from kniffel.engine.errors import InvalidKeepError, InvalidPlayersError

MIN_PLAYERS = 2


def validate_dice_values(values: Sequence[int], count: int = NUM_DICE) -> tuple[int, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of dice values to validate
        count: Exact number of dice required

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)

    if len(values_tuple) != count:
        raise ValueError(f"Exactly {count} dice required, got {len(values_tuple)}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(
                f"Die value at index {i} must be an integer, got {type(value).__name__}."
            )
        if not (1 <= value <= DIE_FACES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DIE_FACES}."
            )

    return values_tuple


def validate_player_names(
    names: Sequence[str],
    max_players: int | None = None
) -> tuple[str, ...]:
    """
    Validate the ordered list of player names for a new game.

    Names are compared case-sensitively, so "Oli" and "oli" are two players.

    Args:
        names: Player names in turn order
        max_players: Upper bound on players (None = no limit)

    Returns:
        Validated names as a tuple

    Raises:
        InvalidPlayersError: If there are too few or too many players,
            or a name is empty or repeated
    """
    if isinstance(names, str):
        raise InvalidPlayersError("Player names must be a sequence of strings, not a string.")

    names_tuple = tuple(names)

    if len(names_tuple) < MIN_PLAYERS:
        raise InvalidPlayersError(
            f"At least {MIN_PLAYERS} players required, got {len(names_tuple)}."
        )
    if max_players is not None and len(names_tuple) > max_players:
        raise InvalidPlayersError(
            f"At most {max_players} players allowed, got {len(names_tuple)}."
        )

    for i, name in enumerate(names_tuple):
        if not isinstance(name, str):
            raise InvalidPlayersError(
                f"Player name at index {i} must be a string, got {type(name).__name__}."
            )
        if not name.strip():
            raise InvalidPlayersError(f"Player name at index {i} is empty.")

    duplicates = sorted(name for name, n in Counter(names_tuple).items() if n > 1)
    if duplicates:
        raise InvalidPlayersError(f"Duplicate player names: {', '.join(duplicates)}.")

    return names_tuple


def normalize_keep_values(keep_values: Iterable[int]) -> tuple[int, ...]:
    """
    Materialize kept values into a tuple of integers.

    Raises:
        InvalidKeepError: If keep_values is not an iterable of integers
    """
    if keep_values is None or isinstance(keep_values, (str, bytes)):
        raise InvalidKeepError("Kept values must be a sequence of integers.")
    try:
        keep_tuple = tuple(keep_values)
    except TypeError:
        raise InvalidKeepError(
            f"Kept values must be a sequence of integers, got {type(keep_values).__name__}."
        ) from None

    for i, value in enumerate(keep_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidKeepError(
                f"Kept value at index {i} must be an integer, got {type(value).__name__}."
            )

    return keep_tuple


def validate_keep_values(
    keep_values: Iterable[int],
    dice: Sequence[int]
) -> frozenset[int]:
    """
    Map kept die values onto table positions.

    The kept values must form a sub-multiset of the dice: a value can only
    be kept as many times as it is showing. For each kept value the
    leftmost unclaimed position showing it is chosen.

    Args:
        keep_values: Face values the player wants to keep
        dice: Current dice values in table order

    Returns:
        Indices of the kept dice

    Raises:
        InvalidKeepError: If a value is not showing often enough
    """
    keep_tuple = normalize_keep_values(keep_values)

    wanted = Counter(keep_tuple)
    showing = Counter(dice)

    for value, n in wanted.items():
        if showing[value] < n:
            raise InvalidKeepError(
                f"Cannot keep {n}x {value!r}: only {showing[value]} showing in {tuple(dice)}."
            )

    kept: set[int] = set()
    for i, value in enumerate(dice):
        if wanted[value] > 0:
            kept.add(i)
            wanted[value] -= 1

    return frozenset(kept)
