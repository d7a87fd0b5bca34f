"""
Engine Core - The board rules engine.

The engine:
1. Holds the board (cells, hands, decks, turn, phase)
2. Checks placement legality
3. Applies card influence
4. Runs the turn / pass / game-over state machine
5. Scores rows and totals
"""

from .errors import BoardError, InvalidArgumentError, InvalidStateError, ListenerError
from .state import (
    Side,
    GamePhase,
    InfluenceSymbol,
    Card,
    Cell,
    EmptyContent,
    PawnContent,
    CardContent,
    parse_influence,
    reflect_influence,
)
from .events import BoardEvent, EventKind
from .board import Board
from .scoring import RowScore
from .action import Action, ActionType, ActionResult
from .reducer import Reducer, apply_action
from .action_generator import legal_actions, legal_placements, is_legal

__all__ = [
    "BoardError",
    "InvalidArgumentError",
    "InvalidStateError",
    "ListenerError",
    "Side",
    "GamePhase",
    "InfluenceSymbol",
    "Card",
    "Cell",
    "EmptyContent",
    "PawnContent",
    "CardContent",
    "parse_influence",
    "reflect_influence",
    "BoardEvent",
    "EventKind",
    "Board",
    "RowScore",
    "Action",
    "ActionType",
    "ActionResult",
    "Reducer",
    "apply_action",
    "legal_actions",
    "legal_placements",
    "is_legal",
]
