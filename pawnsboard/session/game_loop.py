"""
Game Loop - Drives bot turns for a session.

The loop:
1. A person submits a move (or nobody does, in bot-vs-bot games)
2. Bots move until a person's side is to move or the game ends
3. The caller shows the result and waits for the next move

A bot that picks an illegal move passes instead, so a faulty policy can
never stall a game.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..engine_core.action import Action
from ..engine_core.state import Side

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """What the loop is waiting for."""
    RUNNING_BOTS = "running_bots"
    WAITING_HUMAN_ACTION = "waiting_human_action"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing one or more turns.

    Contains the actions that were applied and any errors along the way.
    """
    success: bool
    loop_state: LoopState

    # Actions applied, in order, described for people
    actions: list[str] = field(default_factory=list)

    # Errors/warnings
    errors: list[str] = field(default_factory=list)

    # Game over info
    winner: Optional[Side] = None


class GameLoop:
    """
    Alternates bot moves and human moves for one session.

    Usage:
        loop = GameLoop(session)

        # Let bots move first if FIRST is a bot
        result = loop.run_bot_turns()

        while result.loop_state is LoopState.WAITING_HUMAN_ACTION:
            action = ask_person_for_move(session.snapshot())
            result = loop.play_human_action(action)
    """

    def __init__(self, session: Session):
        self.session = session
        self.state = LoopState.GAME_OVER if session.board.is_game_over() else LoopState.RUNNING_BOTS

    def play_human_action(self, action: Action) -> TurnResult:
        """
        Apply a person's move, then let bots respond.

        An illegal move is reported and nothing else happens, so the caller
        can ask again.
        """
        result = self.session.submit(action)
        if not result.success:
            return TurnResult(
                success=False,
                loop_state=self._current_state(),
                errors=[result.error or "Action rejected"],
            )

        followup = self.run_bot_turns()
        followup.actions.insert(0, action.describe())
        return followup

    def run_bot_turns(self, max_turns: Optional[int] = None) -> TurnResult:
        """
        Let bots move until a person must act, the game ends or
        `max_turns` bot moves have been made.
        """
        applied: list[str] = []
        errors: list[str] = []
        turns = 0

        while max_turns is None or turns < max_turns:
            with self.session.lock:
                board = self.session.board
                if board.is_game_over():
                    break
                side = board.turn
                bot = self.session.bot_for(side)
                if bot is None:
                    break

                decision = bot.select_action(board, self.session.legal_actions())
                result = self.session.submit(decision.action)
                if result.success:
                    applied.append(decision.action.describe())
                else:
                    logger.warning(
                        "%s chose an illegal move (%s), passing instead",
                        bot.get_name(), result.error,
                    )
                    errors.append(f"{bot.get_name()}: {result.error}")
                    fallback = Action.pass_turn(side)
                    fallback_result = self.session.submit(fallback)
                    if not fallback_result.success:
                        errors.append(fallback_result.error or "Pass rejected")
                        break
                    applied.append(fallback.describe())
            turns += 1

        self.state = self._current_state()
        return TurnResult(
            success=not errors,
            loop_state=self.state,
            actions=applied,
            errors=errors,
            winner=self.session.board.winner() if self.state is LoopState.GAME_OVER else None,
        )

    def _current_state(self) -> LoopState:
        if self.session.board.is_game_over():
            return LoopState.GAME_OVER
        if self.session.is_bot_turn():
            return LoopState.RUNNING_BOTS
        return LoopState.WAITING_HUMAN_ACTION
