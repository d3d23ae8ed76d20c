"""
Kniffel - Game Manager

High-level facade for the request layer. Creates games under fresh ids,
checks that commands come from the player whose turn it is, forwards them
to the game and hands back snapshots.
"""

from __future__ import annotations

import logging
import uuid
from typing import Sequence

from kniffel.config.settings import Settings, get_settings
from kniffel.engine.base import BookingCategory
from kniffel.engine.errors import KniffelError
from kniffel.engine.game import KniffelGame
from kniffel.engine.snapshot import GameSnapshot
from kniffel.storage.game_store import GameStore, InMemoryGameStore

logger = logging.getLogger(__name__)


class GameManager:
    """Creates, drives and removes games held in a GameStore.

    Args:
        store: Where games live. Defaults to a new InMemoryGameStore.
        settings: Game settings. Defaults to the cached environment settings.
    """

    def __init__(
        self,
        store: GameStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store if store is not None else InMemoryGameStore()
        self._settings = settings or get_settings()

    @property
    def store(self) -> GameStore:
        return self._store

    def create_game(self, player_names: Sequence[str]) -> tuple[str, GameSnapshot]:
        """Start a new game.

        Args:
            player_names: Names in turn order.

        Returns:
            Tuple of (game_id, initial snapshot).

        Raises:
            InvalidPlayersError: If the names are not valid.
        """
        game = KniffelGame(
            player_names,
            seed=self._settings.dice_seed,
            max_players=self._settings.max_players,
        )
        game_id = uuid.uuid4().hex
        self._store.put(game_id, game)
        logger.info("Game %s created with %d players", game_id, len(game.players))
        return game_id, game.snapshot()

    def get_game(self, game_id: str) -> KniffelGame:
        """Raises GameNotFoundError for unknown ids."""
        return self._store.get(game_id)

    def get_snapshot(self, game_id: str) -> GameSnapshot:
        return self._store.get(game_id).snapshot()

    def reroll(
        self,
        game_id: str,
        player_name: str,
        keep_values: Sequence[int] = (),
    ) -> GameSnapshot:
        """Reroll for the acting player, keeping the given values.

        Raises:
            GameNotFoundError: If the id is unknown.
            NotPlayersTurnError: If player_name is not the current player.
            IllegalPhaseError: If no reroll is allowed.
            InvalidKeepError: If the kept values are not showing.
        """
        game = self._store.get(game_id)
        try:
            game.reroll(keep_values, player_name=player_name)
        except KniffelError as exc:
            logger.warning("Game %s: reroll by %s rejected: %s", game_id, player_name, exc)
            raise
        return game.snapshot()

    def book(
        self,
        game_id: str,
        player_name: str,
        category: BookingCategory | str,
    ) -> tuple[int, GameSnapshot]:
        """Book a category for the acting player.

        Returns:
            Tuple of (points scored, snapshot after the turn passed on).

        Raises:
            GameNotFoundError: If the id is unknown.
            NotPlayersTurnError: If player_name is not the current player.
            IllegalPhaseError: If the game is finished.
            CategoryAlreadyUsedError: If the category was already booked.
            InvalidCategoryError: If a category name is not recognised.
        """
        game = self._store.get(game_id)
        try:
            points = game.book(category, player_name=player_name)
        except KniffelError as exc:
            logger.warning("Game %s: booking by %s rejected: %s", game_id, player_name, exc)
            raise
        return points, game.snapshot()

    def remove_game(self, game_id: str) -> None:
        """Raises GameNotFoundError for unknown ids."""
        self._store.remove(game_id)
        logger.info("Game %s removed", game_id)
