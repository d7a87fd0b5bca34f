"""
Action Generator - Enumerates legal actions for the side to move.

Used by:
1. Bots to enumerate possible moves
2. Front ends to highlight playable cells
3. Validation (is this action legal?)

Placements come first in row-major cell order, then hand order within a
cell; PASS is always last.
"""

from __future__ import annotations

from .action import Action, ActionType
from .board import Board
from .state import GamePhase


def legal_placements(board: Board) -> list[Action]:
    """All legal PLACE actions for the side to move."""
    if board.phase is not GamePhase.IN_PROGRESS:
        return []

    side = board.turn
    hand_size = len(board.get_hand(side))
    actions = []
    for row in range(board.height):
        for col in range(board.width):
            for card_index in range(hand_size):
                if board.can_place(card_index, row, col):
                    actions.append(Action.place(side, card_index, row, col))
    return actions


def legal_actions(board: Board) -> list[Action]:
    """
    All legal actions for the side to move.

    Empty when the game has not started or is over.
    """
    if board.phase is not GamePhase.IN_PROGRESS:
        return []
    return legal_placements(board) + [Action.pass_turn(board.turn)]


def is_legal(board: Board, action: Action) -> bool:
    """Check a single action without mutating the board."""
    if board.phase is not GamePhase.IN_PROGRESS or action.side is not board.turn:
        return False
    if action.action_type is ActionType.PASS:
        return True
    if action.card_index is None or action.row is None or action.col is None:
        return False
    return board.can_place(action.card_index, action.row, action.col)
