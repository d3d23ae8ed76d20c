"""
Kniffel - Turn Engine Tests

Tests for the stateless KniffelEngine transitions.
"""

import random

import pytest

from kniffel.engine.base import (
    ALL_CATEGORIES,
    BookingCategory,
    DiceRoll,
    GamePhase,
    GameState,
    PlayerState,
)
from kniffel.engine.errors import (
    CategoryAlreadyUsedError,
    IllegalPhaseError,
    InvalidCategoryError,
    InvalidKeepError,
    InvalidPlayersError,
)
from kniffel.engine.kniffel import KniffelEngine


def _state(dice, roll_round=1, phase=GamePhase.ROLLING, players=None, index=0):
    players = players or (PlayerState(name="oli"), PlayerState(name="mike"))
    return GameState(
        players=tuple(players),
        dice=DiceRoll(values=tuple(dice)),
        roll_round=roll_round,
        current_player_index=index,
        phase=phase,
    )


# === Rolling ===


class TestRollDice:
    """Tests for KniffelEngine.roll_dice()."""

    def test_five_dice_in_range(self):
        rng = random.Random(1)
        for _ in range(200):
            roll = KniffelEngine.roll_dice(rng)
            assert len(roll) == 5
            assert all(1 <= v <= 6 for v in roll)

    def test_seeded_rolls_repeat(self):
        assert KniffelEngine.roll_dice(random.Random(9)) == KniffelEngine.roll_dice(random.Random(9))

    def test_uses_injected_source(self, scripted_rng):
        assert KniffelEngine.roll_dice(scripted_rng([6, 5, 4, 3, 2])).values == (6, 5, 4, 3, 2)

    def test_default_source(self):
        assert len(KniffelEngine.roll_dice()) == 5


# === New Game ===


class TestNewGame:
    """Tests for KniffelEngine.new_game()."""

    def test_initial_state(self, scripted_rng):
        state = KniffelEngine.new_game(["oli", "mike"], rng=scripted_rng([1, 2, 3, 4, 5]))
        assert [p.name for p in state.players] == ["oli", "mike"]
        assert all(p.score == 0 and not p.used_categories for p in state.players)
        assert state.dice.values == (1, 2, 3, 4, 5)
        assert state.roll_round == 1
        assert state.phase == GamePhase.ROLLING
        assert state.current_player_index == 0
        assert state.finished is False

    @pytest.mark.parametrize("names", [["oli"], ["oli", "oli"], ["oli", ""]])
    def test_invalid_players(self, names):
        with pytest.raises(InvalidPlayersError):
            KniffelEngine.new_game(names)

    def test_max_players(self):
        with pytest.raises(InvalidPlayersError):
            KniffelEngine.new_game(["a", "b", "c"], max_players=2)


# === Reroll ===


class TestReroll:
    """Tests for KniffelEngine.reroll()."""

    def test_kept_dice_stay_in_place(self, scripted_rng):
        state = _state((5, 1, 5, 2, 3))
        new = KniffelEngine.reroll(state, [5, 5], rng=scripted_rng([6, 6, 6]))
        assert new.dice.values == (5, 6, 5, 6, 6)
        assert new.roll_round == 2
        assert new.phase == GamePhase.ROLLING

    def test_keep_nothing_rerolls_all(self, scripted_rng):
        new = KniffelEngine.reroll(_state((1, 1, 1, 1, 1)), [], rng=scripted_rng([2, 3, 4, 5, 6]))
        assert new.dice.values == (2, 3, 4, 5, 6)

    def test_third_roll_switches_to_booking(self, scripted_rng):
        new = KniffelEngine.reroll(_state((1, 2, 3, 4, 5), roll_round=2), [1], rng=scripted_rng([1, 1, 1, 1]))
        assert new.roll_round == 3
        assert new.phase == GamePhase.BOOKING

    def test_no_reroll_in_booking_phase(self):
        state = _state((1, 2, 3, 4, 5), roll_round=3, phase=GamePhase.BOOKING)
        with pytest.raises(IllegalPhaseError):
            KniffelEngine.reroll(state, [])

    def test_invalid_keep(self):
        state = _state((1, 2, 3, 4, 5))
        with pytest.raises(InvalidKeepError):
            KniffelEngine.reroll(state, [6])
        assert state.roll_round == 1

    def test_players_untouched(self, scripted_rng):
        state = _state((1, 2, 3, 4, 5))
        new = KniffelEngine.reroll(state, [], rng=scripted_rng([1] * 5))
        assert new.players is state.players
        assert new.current_player_index == state.current_player_index


# === Book ===


class TestBook:
    """Tests for KniffelEngine.book()."""

    def test_scores_and_passes_turn(self, scripted_rng):
        state = _state((5, 5, 5, 1, 2))
        new, points = KniffelEngine.book(state, BookingCategory.FIVES, rng=scripted_rng([1, 2, 3, 4, 6]))
        assert points == 15
        assert new.players[0].score == 15
        assert new.players[0].used_categories == {BookingCategory.FIVES}
        assert new.current_player_index == 1
        assert new.dice.values == (1, 2, 3, 4, 6)
        assert new.roll_round == 1
        assert new.phase == GamePhase.ROLLING

    def test_book_in_booking_phase(self, scripted_rng):
        state = _state((2, 2, 3, 3, 3), roll_round=3, phase=GamePhase.BOOKING)
        new, points = KniffelEngine.book(state, BookingCategory.FULL_HOUSE, rng=scripted_rng())
        assert points == 25
        assert new.roll_round == 1
        assert new.phase == GamePhase.ROLLING

    def test_category_by_name(self, scripted_rng):
        new, points = KniffelEngine.book(_state((5, 5, 5, 1, 2)), "fives", rng=scripted_rng())
        assert points == 15
        assert new.players[0].used_categories == {BookingCategory.FIVES}

    def test_unknown_category_name(self):
        state = _state((5, 5, 5, 1, 2))
        with pytest.raises(InvalidCategoryError):
            KniffelEngine.book(state, "bonus")

    def test_zero_point_booking_still_consumes(self, scripted_rng):
        new, points = KniffelEngine.book(_state((1, 2, 3, 4, 6)), BookingCategory.KNIFFEL, rng=scripted_rng())
        assert points == 0
        assert BookingCategory.KNIFFEL in new.players[0].used_categories

    def test_turn_wraps_to_first_player(self, scripted_rng):
        state = _state((1, 1, 1, 1, 1), index=1)
        new, _ = KniffelEngine.book(state, BookingCategory.ONES, rng=scripted_rng())
        assert new.current_player_index == 0
        assert new.players[1].score == 5

    def test_category_already_used(self):
        used = PlayerState(name="oli", score=15, used_categories=frozenset({BookingCategory.FIVES}))
        state = _state((5, 5, 5, 5, 5), players=(used, PlayerState(name="mike")))
        with pytest.raises(CategoryAlreadyUsedError):
            KniffelEngine.book(state, BookingCategory.FIVES)
        assert state.players[0].score == 15

    def test_last_booking_finishes_game(self):
        almost = frozenset(ALL_CATEGORIES) - {BookingCategory.CHANCE}
        full = frozenset(ALL_CATEGORIES)
        players = (
            PlayerState(name="oli", score=100, used_categories=full),
            PlayerState(name="mike", score=90, used_categories=almost),
        )
        state = _state((6, 6, 6, 6, 5), players=players, index=1)
        new, points = KniffelEngine.book(state, BookingCategory.CHANCE)
        assert points == 29
        assert new.finished is True
        assert new.dice == state.dice
        assert new.current_player_index == 0
        assert KniffelEngine.get_winners(new) == ("mike",)

    def test_finished_game_rejects_book(self):
        full = frozenset(ALL_CATEGORIES)
        state = GameState(
            players=(PlayerState(name="oli", used_categories=full), PlayerState(name="mike", used_categories=full)),
            dice=DiceRoll((1, 2, 3, 4, 5)),
            finished=True,
        )
        with pytest.raises(IllegalPhaseError):
            KniffelEngine.book(state, BookingCategory.CHANCE)
        with pytest.raises(IllegalPhaseError):
            KniffelEngine.reroll(state, [])


# === Standings ===


class TestStandings:
    """Tests for KniffelEngine.standings() and get_winners()."""

    def test_sorted_by_score_ties_keep_order(self):
        players = (
            PlayerState(name="a", score=10),
            PlayerState(name="b", score=30),
            PlayerState(name="c", score=10),
        )
        assert [p.name for p in KniffelEngine.standings(players)] == ["b", "a", "c"]

    def test_no_winners_while_running(self):
        assert KniffelEngine.get_winners(_state((1, 2, 3, 4, 5))) == ()

    def test_tied_winners(self):
        full = frozenset(ALL_CATEGORIES)
        state = GameState(
            players=(
                PlayerState(name="oli", score=200, used_categories=full),
                PlayerState(name="mike", score=200, used_categories=full),
            ),
            dice=DiceRoll((1, 2, 3, 4, 5)),
            finished=True,
        )
        assert KniffelEngine.get_winners(state) == ("oli", "mike")
