"""
Action System - Actions and results.

Bots, controllers and the CLI all describe a move as an Action and submit
it through the reducer. There is no privileged path for bots: an Action
goes through the same board checks a human move does.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .events import BoardEvent
from .state import Side


class ActionType(Enum):
    """Types of actions a side can take."""
    PLACE = "place"
    PASS = "pass"


@dataclass(frozen=True)
class Action:
    """
    A complete move for one side.

    PLACE actions carry the hand index and the target cell; PASS actions
    carry only the side.
    """
    action_type: ActionType
    side: Side
    card_index: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None

    @classmethod
    def place(cls, side: Side, card_index: int, row: int, col: int) -> Action:
        """Factory for a placement."""
        return cls(
            action_type=ActionType.PLACE,
            side=side,
            card_index=card_index,
            row=row,
            col=col,
        )

    @classmethod
    def pass_turn(cls, side: Side) -> Action:
        """Factory for a pass."""
        return cls(action_type=ActionType.PASS, side=side)

    @property
    def is_pass(self) -> bool:
        return self.action_type is ActionType.PASS

    def describe(self) -> str:
        if self.is_pass:
            return f"{self.side.name} passes"
        return (
            f"{self.side.name} plays card {self.card_index} "
            f"at ({self.row}, {self.col})"
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - The board event (if it succeeded)
    - Error message and code (if it failed)
    """
    success: bool
    event: Optional[BoardEvent] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def failure(cls, error: str, error_code: Optional[str] = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_event(cls, event: BoardEvent) -> ActionResult:
        """Create a success result carrying the board event."""
        return cls(success=True, event=event)

    @property
    def game_over(self) -> bool:
        return bool(self.event and self.event.game_over)
