"""
Tests for bot action selection and legality.

Tests:
- Bots only select legal actions
- Greedy strategies pick the documented move
- The registry builds policies by name
"""

import pytest

from ..bots import (
    BotPolicy,
    RandomPolicy,
    FillFirstPolicy,
    MaxRowScorePolicy,
    POLICIES,
    create_policy,
    create_player,
)
from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.board import Board
from ..engine_core.reducer import Reducer
from ..engine_core.state import Side
from ..games.queens.setup import create_board
from .conftest import make_card, make_deck


class TestRandomPolicy:
    """Tests for RandomPolicy."""

    def test_selects_legal_action(self, board):
        actions = legal_actions(board)
        decision = RandomPolicy(seed=1).select_action(board, actions)
        assert decision.action in actions
        assert not decision.action.is_pass
        assert decision.considered == len(actions) - 1

    def test_seed_is_deterministic(self, board):
        actions = legal_actions(board)
        picks_a = [RandomPolicy(seed=7).select_action(board, actions).action for _ in range(3)]
        picks_b = [RandomPolicy(seed=7).select_action(board, actions).action for _ in range(3)]
        assert picks_a == picks_b

    def test_no_actions(self, board):
        with pytest.raises(ValueError):
            RandomPolicy().select_action(board, [])

    def test_passes_only_when_stuck(self, second_deck):
        board = Board(3, 5)
        board.start_game(make_deck(Side.FIRST, cost=3), second_deck, 5)

        decision = RandomPolicy(seed=1).select_action(board, legal_actions(board))
        assert decision.action.is_pass


class TestFillFirstPolicy:
    """Tests for FillFirstPolicy."""

    def test_first_card_first_cell(self, board):
        decision = FillFirstPolicy().select_action(board, legal_actions(board))
        assert decision.action == Action.place(Side.FIRST, 0, 0, 0)

    def test_skips_to_next_fitting_cell(self, board):
        reducer = Reducer(board=board)
        reducer.apply(Action.place(Side.FIRST, 0, 0, 0))
        reducer.apply(Action.pass_turn(Side.SECOND))

        decision = FillFirstPolicy().select_action(board, legal_actions(board))
        assert decision.action == Action.place(Side.FIRST, 0, 1, 0)

    def test_passes_when_first_card_fits_nowhere(self, second_deck):
        first = make_deck(Side.FIRST, head=[make_card("Big", cost=3, value=9)])
        board = Board(3, 5)
        board.start_game(first, second_deck, 5)

        decision = FillFirstPolicy().select_action(board, legal_actions(board))
        assert decision.action.is_pass


class TestMaxRowScorePolicy:
    """Tests for MaxRowScorePolicy."""

    @pytest.fixture
    def valued_board(self, second_deck):
        first = make_deck(Side.FIRST, head=[
            make_card("One", value=1),
            make_card("Three", value=3),
            make_card("Two", value=2),
        ])
        board = Board(3, 5)
        board.start_game(first, second_deck, 5)
        return board

    def test_highest_value_in_first_tied_row(self, valued_board):
        decision = MaxRowScorePolicy().select_action(valued_board, legal_actions(valued_board))
        assert decision.action == Action.place(Side.FIRST, 1, 0, 0)
        assert decision.details["row"] == 0

    def test_skips_rows_already_won(self, valued_board):
        valued_board.place_card_in_position(1, 0, 0)
        valued_board.pass_turn()

        decision = MaxRowScorePolicy().select_action(valued_board, legal_actions(valued_board))
        assert decision.action.row == 1
        assert valued_board.get_hand()[decision.action.card_index].name == "Two"

    def test_catches_up_in_losing_row(self, board):
        """SECOND is behind in row 0 and plays there."""
        board.place_card_in_position(0, 0, 0)

        decision = MaxRowScorePolicy().select_action(board, legal_actions(board))
        assert decision.action.side is Side.SECOND
        assert decision.action.row == 0

    def test_passes_when_nothing_fits(self, second_deck):
        first = make_deck(Side.FIRST, cost=3)
        board = Board(3, 5)
        board.start_game(first, second_deck, 5)

        decision = MaxRowScorePolicy().select_action(board, legal_actions(board))
        assert decision.action.is_pass


class TestRegistry:
    """Tests for the policy registry."""

    @pytest.mark.parametrize("name", sorted(POLICIES))
    def test_create_by_name(self, name):
        assert isinstance(create_policy(name, seed=3), BotPolicy)

    def test_names_are_case_insensitive(self):
        assert isinstance(create_policy("MaxRow"), MaxRowScorePolicy)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown policy"):
            create_policy("minimax")

    def test_human_is_no_bot(self):
        assert create_player("human") is None
        assert isinstance(create_player("fillfirst"), FillFirstPolicy)


class TestBotGames:
    """Bots play whole games through the reducer."""

    @pytest.mark.parametrize("first,second", [
        ("random", "maxrow"),
        ("maxrow", "fillfirst"),
        ("fillfirst", "random"),
    ])
    def test_game_finishes_with_legal_moves(self, first, second):
        board = create_board(shuffle_seed=11)
        reducer = Reducer(board=board)
        bots = {Side.FIRST: create_policy(first, seed=5), Side.SECOND: create_policy(second, seed=6)}

        for _ in range(200):
            if board.is_game_over():
                break
            actions = legal_actions(board)
            decision = bots[board.turn].select_action(board, actions)
            assert decision.action in actions
            assert reducer.apply(decision.action).success

        assert board.is_game_over()
