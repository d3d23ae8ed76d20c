"""
Kniffel - Engine Errors

Every rejected operation raises one of these. They subclass ValueError so
callers that only care about "bad input" can catch them in one place.
"""


class KniffelError(ValueError):
    """Base class for all game rule violations."""


class InvalidPlayersError(KniffelError):
    """Too few players, or an empty or duplicate player name."""


class IllegalPhaseError(KniffelError):
    """The game's phase or lifecycle does not allow the operation."""


class NotPlayersTurnError(IllegalPhaseError):
    """A command arrived from a player other than the current one."""


class InvalidKeepError(KniffelError):
    """The kept values are not a sub-multiset of the current roll."""


class CategoryAlreadyUsedError(KniffelError):
    """The current player has already booked this category."""


class InvalidCategoryError(KniffelError):
    """A category name that does not match any booking category."""
