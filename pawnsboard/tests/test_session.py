"""
Tests for sessions and the game loop.

Tests:
- Session lifecycle through the manager
- Bot-vs-bot games run to completion
- Human moves interleaved with bot replies
- Faulty bots fall back to passing
"""

import threading

import pytest

from ..bots.policy import BotPolicy, BotDecision
from ..bots.strategies import FillFirstPolicy
from ..config import GameConfig
from ..engine_core.action import Action
from ..engine_core.events import EventKind
from ..engine_core.reducer import ErrorCode
from ..engine_core.state import Side
from ..games.queens.cards import standard_deck
from ..games.queens.deck_loader import DeckPair, format_deck
from ..session import SessionManager, SessionState, GameLoop, LoopState


class IllegalPolicy(BotPolicy):
    """Always asks for a card it does not hold."""

    def select_action(self, board, legal_actions):
        return BotDecision(action=Action.place(board.turn, 99, 0, 0))


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_session(self, manager):
        session = manager.create_session()

        assert session.is_active()
        assert session.board.turn is Side.FIRST
        assert isinstance(session.bot_for(Side.FIRST), FillFirstPolicy)
        assert manager.get_session(session.session_id) is session
        assert session.session_id in manager.list_active_sessions()

    def test_human_side_has_no_bot(self, manager):
        session = manager.create_session(first_player="human")
        assert session.bot_for(Side.FIRST) is None
        assert not session.is_bot_turn()

    def test_policy_instance(self, manager):
        policy = FillFirstPolicy()
        session = manager.create_session(second_player=policy)
        assert session.bot_for(Side.SECOND) is policy

    def test_unknown_player(self, manager):
        with pytest.raises(ValueError):
            manager.create_session(first_player="oracle")

    def test_custom_decks(self, manager):
        decks = DeckPair(first=standard_deck(Side.FIRST), second=standard_deck(Side.SECOND))
        session = manager.create_session(hand_size=2, decks=decks)
        assert len(session.board.get_hand(Side.FIRST)) == 2
        assert session.board.max_hand_size == 5

    def test_end_session(self, manager):
        session = manager.create_session()

        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert session.state is SessionState.ABANDONED
        assert not manager.end_session(session.session_id)

    def test_submit_after_end(self, manager):
        session = manager.create_session(first_player="human")
        manager.end_session(session.session_id, reason="quit")

        result = session.submit(Action.pass_turn(Side.FIRST))

        assert not result.success
        assert result.error_code == "SESSION_CLOSED"

    def test_cleanup_only_removes_finished(self, manager):
        finished = manager.create_session()
        GameLoop(finished).run_bot_turns()
        running = manager.create_session(first_player="human")

        removed = manager.cleanup_stale_sessions(max_age_seconds=-1)

        assert removed == 1
        assert manager.get_session(finished.session_id) is None
        assert manager.get_session(running.session_id) is running

    def test_from_config(self, manager, tmp_path):
        path = tmp_path / "deck.txt"
        path.write_text(format_deck(standard_deck(Side.FIRST)))
        config = GameConfig(
            hand_size=3,
            first_deck=str(path),
            second_deck=str(path),
            first_player="random",
            second_player="human",
            seed=4,
        )

        session = manager.create_session_from_config(config)

        assert len(session.board.get_hand(Side.FIRST)) == 3
        assert session.bot_for(Side.SECOND) is None


class TestSession:
    """Tests for a single Session."""

    def test_submit_records_events_and_history(self, manager):
        session = manager.create_session(first_player="human", second_player="human")

        assert session.submit(Action.place(Side.FIRST, 0, 0, 0)).success
        assert session.submit(Action.pass_turn(Side.SECOND)).success

        assert [e.kind for e in session.events] == [EventKind.PLACED, EventKind.PASSED]
        assert len(session.history) == 2

    def test_wrong_side_rejected(self, manager):
        session = manager.create_session(first_player="human", second_player="human")
        result = session.submit(Action.pass_turn(Side.SECOND))
        assert result.error_code == ErrorCode.NOT_YOUR_TURN

    def test_double_pass_finishes_session(self, manager):
        session = manager.create_session(first_player="human", second_player="human")
        session.submit(Action.pass_turn(Side.FIRST))
        session.submit(Action.pass_turn(Side.SECOND))

        assert session.state is SessionState.GAME_OVER
        assert session.legal_actions() == []
        assert session.snapshot().game_over

    def test_concurrent_submits_are_serialized(self, manager):
        """Two threads racing to pass for FIRST: exactly one succeeds."""
        session = manager.create_session(first_player="human", second_player="human")
        results = []
        barrier = threading.Barrier(2)

        def race():
            barrier.wait()
            results.append(session.submit(Action.pass_turn(Side.FIRST)))

        threads = [threading.Thread(target=race) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(r.success for r in results) == [False, True]
        assert session.board.turn is Side.SECOND


class TestGameLoop:
    """Tests for GameLoop."""

    @pytest.mark.parametrize("first,second,seed", [
        ("fillfirst", "maxrow", None),
        ("random", "random", 3),
        ("maxrow", "random", 8),
    ])
    def test_bot_game_runs_to_completion(self, manager, first, second, seed):
        session = manager.create_session(first_player=first, second_player=second, seed=seed)

        result = GameLoop(session).run_bot_turns()

        assert result.success
        assert result.loop_state is LoopState.GAME_OVER
        assert result.winner is session.board.winner()
        assert session.state is SessionState.GAME_OVER
        assert session.events[-1].game_over
        assert len(result.actions) == len(session.history)

    def test_max_turns(self, manager):
        session = manager.create_session()
        result = GameLoop(session).run_bot_turns(max_turns=2)

        assert len(result.actions) == 2
        assert result.loop_state is LoopState.RUNNING_BOTS

    def test_waits_for_human(self, manager):
        session = manager.create_session(first_player="human")
        loop = GameLoop(session)

        result = loop.run_bot_turns()

        assert result.actions == []
        assert result.loop_state is LoopState.WAITING_HUMAN_ACTION

    def test_human_move_then_bot_reply(self, manager):
        session = manager.create_session(first_player="human", second_player="fillfirst")
        loop = GameLoop(session)

        result = loop.play_human_action(Action.place(Side.FIRST, 0, 1, 0))

        assert result.success
        assert result.actions == [
            "FIRST plays card 0 at (1, 0)",
            "SECOND plays card 0 at (0, 4)",
        ]
        assert result.loop_state is LoopState.WAITING_HUMAN_ACTION
        assert session.board.turn is Side.FIRST

    def test_illegal_human_move(self, manager):
        session = manager.create_session(first_player="human")
        loop = GameLoop(session)

        result = loop.play_human_action(Action.place(Side.FIRST, 0, 0, 4))

        assert not result.success
        assert result.errors
        assert result.loop_state is LoopState.WAITING_HUMAN_ACTION
        assert session.history == []

    def test_illegal_bot_move_becomes_pass(self, manager, caplog):
        session = manager.create_session(first_player=IllegalPolicy(), second_player="human")

        result = GameLoop(session).run_bot_turns()

        assert not result.success
        assert result.actions == ["FIRST passes"]
        assert "IllegalPolicy" in result.errors[0]
        assert session.board.last_passed(Side.FIRST)
        assert "passing instead" in caplog.text
