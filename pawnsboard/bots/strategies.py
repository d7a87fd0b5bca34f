"""
Greedy strategies.

Two cheap heuristics that look only at the current board:
- FillFirstPolicy plays the first card in hand at the first cell it fits
- MaxRowScorePolicy tries to catch up in the first row it is losing or tying

Both pass when they find nothing to play.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionType
from .policy import BotPolicy, BotDecision

if TYPE_CHECKING:
    from ..engine_core.board import Board

logger = logging.getLogger(__name__)


def _placements(legal_actions: list[Action]) -> list[Action]:
    return [a for a in legal_actions if a.action_type is ActionType.PLACE]


def _pass_action(board: Board, legal_actions: list[Action]) -> Action:
    for action in legal_actions:
        if action.is_pass:
            return action
    return Action.pass_turn(board.turn)


class FillFirstPolicy(BotPolicy):
    """
    Plays the first card in hand at the first legal cell, scanning rows top
    to bottom and columns left to right.
    """

    def select_action(self, board: Board, legal_actions: list[Action]) -> BotDecision:
        placements = _placements(legal_actions)
        for action in placements:
            if action.card_index == 0:
                logger.debug("fill-first: %s", action.describe())
                return BotDecision(
                    action=action,
                    reason=f"First legal cell for the first card: ({action.row}, {action.col})",
                    considered=len(placements),
                )

        logger.debug("fill-first: no cell fits the first card, passing")
        return BotDecision(
            action=_pass_action(board, legal_actions),
            reason="First card fits nowhere",
            considered=len(placements),
        )


class MaxRowScorePolicy(BotPolicy):
    """
    Goes row by row looking for one where this side's sum is at most the
    opponent's, and plays the highest-value card that can go in that row
    and bring the sum level or ahead.
    """

    def select_action(self, board: Board, legal_actions: list[Action]) -> BotDecision:
        side = board.turn
        hand = board.get_hand(side)
        placements = _placements(legal_actions)

        for row in range(board.height):
            scores = board.row_scores(row)
            own = scores.for_side(side)
            opponent = scores.for_side(side.opponent)
            if own > opponent:
                continue

            best: Action | None = None
            best_value = -1
            for action in placements:
                if action.row != row:
                    continue
                value = hand[action.card_index].value
                if own + value >= opponent and value > best_value:
                    best = action
                    best_value = value

            if best is not None:
                logger.debug(
                    "max-row: row %d (%d vs %d), %s", row, own, opponent, best.describe()
                )
                return BotDecision(
                    action=best,
                    reason=f"Raises row {row} from {own} to {own + best_value} against {opponent}",
                    considered=len(placements),
                    details={"row": row, "own": own, "opponent": opponent},
                )

        logger.debug("max-row: no row can be caught up, passing")
        return BotDecision(
            action=_pass_action(board, legal_actions),
            reason="No losing or tied row can be caught up",
            considered=len(placements),
        )
