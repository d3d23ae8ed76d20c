"""
Kniffel - Turn Engine

Turn sequencing for Kniffel. All methods are stateless class methods that
take a GameState and return a new one; nothing is mutated in place, so a
rejected operation can never leave a half-updated game behind.

Turn Rules:
    - Each turn starts with all five dice rolled (round 1)
    - Up to two rerolls (rounds 2 and 3), keeping any subset of the dice
    - After the third roll the player must book
    - Booking is allowed in any round and ends the turn
    - Each player books every one of the 13 categories exactly once
    - The game ends when all players have filled their scorecards
"""

import random
from typing import Iterable, Sequence

from kniffel.engine.base import (
    DIE_FACES,
    MAX_ROLL_ROUNDS,
    NUM_DICE,
    BookingCategory,
    DiceRoll,
    GamePhase,
    GameState,
    PlayerState,
)
from kniffel.engine.errors import CategoryAlreadyUsedError, IllegalPhaseError
from kniffel.engine.scoring import score_category
from kniffel.engine.validators import validate_keep_values, validate_player_names


class KniffelEngine:
    """
    Stateless engine for Kniffel.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored. Randomness comes from
    the rng argument; pass a seeded random.Random for repeatable dice.
    """

    NUM_DICE = NUM_DICE
    DIE_FACES = DIE_FACES
    MAX_ROLL_ROUNDS = MAX_ROLL_ROUNDS

    @classmethod
    def roll_die(cls, rng: random.Random | None = None) -> int:
        """Roll a single D6."""
        return (rng or random).randint(1, cls.DIE_FACES)

    @classmethod
    def roll_dice(cls, rng: random.Random | None = None) -> DiceRoll:
        """
        Roll all five dice.

        Args:
            rng: Random source (default: the random module)

        Returns:
            DiceRoll with five independent values
        """
        return DiceRoll(values=tuple(cls.roll_die(rng) for _ in range(cls.NUM_DICE)))

    @classmethod
    def new_game(
        cls,
        player_names: Sequence[str],
        rng: random.Random | None = None,
        max_players: int | None = None
    ) -> GameState:
        """
        Set up a game and make the first roll for the first player.

        Args:
            player_names: Names in turn order
            rng: Random source for the dice
            max_players: Optional upper bound on players

        Returns:
            GameState in round 1, ROLLING

        Raises:
            InvalidPlayersError: If the names are not valid
        """
        names = validate_player_names(player_names, max_players=max_players)
        return GameState(
            players=tuple(PlayerState(name=name) for name in names),
            dice=cls.roll_dice(rng),
        )

    @classmethod
    def reroll(
        cls,
        state: GameState,
        keep_values: Iterable[int],
        rng: random.Random | None = None
    ) -> GameState:
        """
        Reroll every die except the kept ones.

        Kept dice stay in their table positions.

        Args:
            state: Current game state
            keep_values: Face values to keep (a sub-multiset of the dice)
            rng: Random source for the dice

        Returns:
            New state with the round advanced; BOOKING once round 3 is reached

        Raises:
            IllegalPhaseError: If the game is finished or the player must book
            InvalidKeepError: If a kept value is not showing often enough
        """
        if state.finished:
            raise IllegalPhaseError("The game is finished.")
        if state.phase != GamePhase.ROLLING:
            raise IllegalPhaseError(
                f"No rerolls left for {state.current_player.name}; a category must be booked."
            )

        kept = validate_keep_values(keep_values, state.dice.values)
        values = tuple(
            value if i in kept else cls.roll_die(rng)
            for i, value in enumerate(state.dice.values)
        )
        roll_round = state.roll_round + 1
        phase = GamePhase.BOOKING if roll_round >= cls.MAX_ROLL_ROUNDS else GamePhase.ROLLING

        return GameState(
            players=state.players,
            dice=DiceRoll(values=values),
            roll_round=roll_round,
            current_player_index=state.current_player_index,
            phase=phase,
        )

    @classmethod
    def book(
        cls,
        state: GameState,
        category: BookingCategory | str,
        rng: random.Random | None = None
    ) -> tuple[GameState, int]:
        """
        Book the current dice into a category and pass the turn on.

        Args:
            state: Current game state
            category: Category to fill, as a member or its name
            rng: Random source for the next player's first roll

        Returns:
            Tuple of (new_state, points_scored)

        Raises:
            IllegalPhaseError: If the game is finished
            CategoryAlreadyUsedError: If the player already used the category
            InvalidCategoryError: If a category name is not recognised
        """
        category = BookingCategory.parse(category)
        if state.finished:
            raise IllegalPhaseError("The game is finished.")

        player = state.current_player
        if category in player.used_categories:
            raise CategoryAlreadyUsedError(
                f"{player.name} has already booked {category.name}."
            )

        points = score_category(state.dice, category)
        players = list(state.players)
        players[state.current_player_index] = player.with_booking(category, points)
        players_tuple = tuple(players)
        next_index = (state.current_player_index + 1) % len(players_tuple)

        if cls.is_game_over(players_tuple):
            new_state = GameState(
                players=players_tuple,
                dice=state.dice,
                roll_round=state.roll_round,
                current_player_index=next_index,
                phase=state.phase,
                finished=True,
            )
        else:
            new_state = GameState(
                players=players_tuple,
                dice=cls.roll_dice(rng),
                current_player_index=next_index,
            )
        return new_state, points

    @classmethod
    def is_game_over(cls, players: Sequence[PlayerState]) -> bool:
        """True once every player has booked every category."""
        return all(player.is_complete for player in players)

    @classmethod
    def standings(cls, players: Sequence[PlayerState]) -> list[PlayerState]:
        """Players from highest to lowest score; ties keep turn order."""
        return sorted(players, key=lambda p: -p.score)

    @classmethod
    def get_winners(cls, state: GameState) -> tuple[str, ...]:
        """
        Names of the players sharing the top score.

        Returns:
            Empty tuple while the game is still running
        """
        if not state.finished:
            return ()
        top = max(player.score for player in state.players)
        return tuple(player.name for player in state.players if player.score == top)
