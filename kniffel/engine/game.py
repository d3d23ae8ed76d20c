"""
Kniffel - Game

The authoritative, mutable game object. KniffelGame owns the current
GameState, the random source and an event log, and serializes every
operation on one game through its own lock. The rules themselves live in
KniffelEngine; this class only swaps in the state the engine computes.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Sequence

from kniffel.engine.base import (
    ALL_CATEGORIES,
    BookingCategory,
    DiceRoll,
    GamePhase,
    GameState,
    PlayerState,
)
from kniffel.engine.errors import NotPlayersTurnError
from kniffel.engine.events import EventPayload, GameEvent, rolled
from kniffel.engine.kniffel import KniffelEngine
from kniffel.engine.scoring import score_preview
from kniffel.engine.snapshot import GameSnapshot, PlayerSnapshot
from kniffel.engine.validators import normalize_keep_values

logger = logging.getLogger(__name__)


class KniffelGame:
    """A single game of Kniffel.

    Construct with the player names in turn order. The first player's
    initial roll is made immediately.

    Args:
        player_names: Names in turn order (at least two, all distinct).
        rng: Random source for the dice. Defaults to a fresh random.Random.
        seed: Seed for a new random.Random; ignored when rng is given.
        max_players: Optional upper bound on the number of players.

    Raises:
        InvalidPlayersError: If the names are not valid.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
        max_players: int | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._lock = threading.RLock()
        self._events: list[EventPayload] = []
        self._state = KniffelEngine.new_game(
            player_names, rng=self._rng, max_players=max_players
        )

        names = [p.name for p in self._state.players]
        logger.info("Created game for %s", ", ".join(names))
        self._emit(EventPayload(event=GameEvent.GAME_CREATED, data={"players": names}))
        self._emit_roll()

    # -- Read-only projections -------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> tuple[PlayerState, ...]:
        return self._state.players

    @property
    def current_player(self) -> PlayerState:
        return self._state.current_player

    @property
    def dice(self) -> DiceRoll:
        return self._state.dice

    @property
    def roll_round(self) -> int:
        return self._state.roll_round

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def finished(self) -> bool:
        return self._state.finished

    @property
    def used_categories(self) -> frozenset[BookingCategory]:
        """Categories the current player has already booked."""
        return self._state.current_player.used_categories

    @property
    def available_categories(self) -> tuple[BookingCategory, ...]:
        """Categories the current player can still book, in declaration order."""
        return self._state.current_player.available_categories

    def get_player(self, name: str) -> PlayerState:
        for player in self._state.players:
            if player.name == name:
                return player
        raise KeyError(name)

    # -- Mutations -------------------------------------------------------

    def reroll(
        self,
        keep_values: Sequence[int] = (),
        *,
        player_name: str | None = None,
    ) -> tuple[DiceRoll, int]:
        """Reroll all dice except the kept values.

        Args:
            keep_values: Face values to keep, e.g. [5, 5] keeps two fives.
            player_name: Acting player; checked against the current player
                when given.

        Returns:
            Tuple of (new dice, new roll round).

        Raises:
            IllegalPhaseError: If the game is finished or round 3 was reached.
            NotPlayersTurnError: If player_name is not the current player.
            InvalidKeepError: If a kept value is not showing often enough.
        """
        keep = normalize_keep_values(keep_values)
        with self._lock:
            self._check_turn(player_name)
            state = KniffelEngine.reroll(self._state, keep, rng=self._rng)
            kept_event = EventPayload(
                event=GameEvent.DICE_KEPT,
                player_name=state.current_player.name,
                data={"kept": sorted(keep)},
            )
            self._state = state

            self._emit(kept_event)
            self._emit_roll()
            return state.dice, state.roll_round

    def book(
        self,
        category: BookingCategory | str,
        *,
        player_name: str | None = None,
    ) -> int:
        """Book the current dice into a category and end the turn.

        Args:
            category: Member of BookingCategory or its name.
            player_name: Acting player; checked against the current player
                when given.

        Returns:
            Points added to the player's score.

        Raises:
            IllegalPhaseError: If the game is finished.
            NotPlayersTurnError: If player_name is not the current player.
            CategoryAlreadyUsedError: If the category was already booked.
            InvalidCategoryError: If a category name is not recognised.
        """
        category = BookingCategory.parse(category)
        with self._lock:
            self._check_turn(player_name)
            previous = self._state
            state, points = KniffelEngine.book(previous, category, rng=self._rng)
            self._state = state

            player_name = previous.current_player.name
            logger.info(
                "%s booked %s for %d points (dice %s)",
                player_name, category.name, points, previous.dice.values,
            )
            self._emit(EventPayload(
                event=GameEvent.CATEGORY_BOOKED,
                player_name=player_name,
                data={
                    "category": category.value,
                    "points": points,
                    "dice": list(previous.dice.values),
                    "score": state.players[previous.current_player_index].score,
                },
            ))

            if state.finished:
                winners = KniffelEngine.get_winners(state)
                logger.info("Game finished; winner(s): %s", ", ".join(winners))
                self._emit(EventPayload(
                    event=GameEvent.GAME_FINISHED,
                    data={
                        "winners": list(winners),
                        "scores": {p.name: p.score for p in state.players},
                    },
                ))
            else:
                self._emit(EventPayload(
                    event=GameEvent.TURN_ADVANCED,
                    player_name=state.current_player.name,
                ))
                self._emit_roll()
            return points

    # -- Queries ---------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Observable state of the game."""
        with self._lock:
            state = self._state
            return GameSnapshot(
                players=[
                    PlayerSnapshot(
                        name=p.name,
                        score=p.score,
                        used_categories=[c for c in ALL_CATEGORIES if c in p.used_categories],
                    )
                    for p in state.players
                ],
                current_player_name=state.current_player.name,
                phase=state.phase,
                available_categories=list(state.current_player.available_categories),
                dice_rolls=list(state.dice.values),
                roll_round=state.roll_round,
                finished=state.finished,
            )

    def score_preview(self) -> dict[BookingCategory, int]:
        """Points the current dice would score in each available category."""
        with self._lock:
            if self._state.finished:
                return {}
            return score_preview(self._state.dice, self._state.current_player.used_categories)

    def standings(self) -> list[PlayerState]:
        """Players ordered by score, highest first."""
        return KniffelEngine.standings(self._state.players)

    def winners(self) -> tuple[str, ...]:
        """Top scorers once the game is finished, else empty."""
        return KniffelEngine.get_winners(self._state)

    # -- Events ----------------------------------------------------------

    @property
    def events(self) -> list[EventPayload]:
        """All events not yet popped, oldest first."""
        with self._lock:
            return list(self._events)

    def pop_events(self) -> list[EventPayload]:
        """Return and clear all recorded events."""
        with self._lock:
            events = list(self._events)
            self._events.clear()
            return events

    def _check_turn(self, player_name: str | None) -> None:
        state = self._state
        if player_name is None or state.finished:
            return
        if player_name != state.current_player.name:
            raise NotPlayersTurnError(
                f"It is {state.current_player.name}'s turn, not {player_name}'s."
            )

    def _emit(self, payload: EventPayload) -> None:
        self._events.append(payload)

    def _emit_roll(self) -> None:
        state = self._state
        logger.debug(
            "%s rolled %s (round %d)",
            state.current_player.name, state.dice.values, state.roll_round,
        )
        self._emit(rolled(state.current_player.name, state.dice.values, state.roll_round))

    def __repr__(self) -> str:
        state = self._state
        return (
            f"KniffelGame(players={[p.name for p in state.players]!r}, "
            f"current={state.current_player.name!r}, round={state.roll_round}, "
            f"finished={state.finished})"
        )


def create_game(
    player_names: Sequence[str],
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> KniffelGame:
    """Create a game and make the first player's initial roll."""
    return KniffelGame(player_names, rng=rng, seed=seed)


def reroll(game: KniffelGame, keep_values: Sequence[int] = ()) -> tuple[DiceRoll, int]:
    """Reroll the dice not kept. See KniffelGame.reroll."""
    return game.reroll(keep_values)


def book(game: KniffelGame, category: BookingCategory | str) -> int:
    """Book a category for the current player. See KniffelGame.book."""
    return game.book(category)


def snapshot(game: KniffelGame) -> GameSnapshot:
    """Observable state of a game."""
    return game.snapshot()
