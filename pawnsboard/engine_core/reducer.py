"""
Reducer - Applies actions to a board.

The reducer is the entry point for bots and controllers. It checks that the
acting side is the side to move, dispatches to the board, and turns engine
errors into failed ActionResults so callers can re-prompt or fall back to
a pass.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .action import Action, ActionResult, ActionType
from .board import Board
from .errors import InvalidArgumentError, InvalidStateError, ListenerError

logger = logging.getLogger(__name__)


class ErrorCode:
    """Error codes reported in failed ActionResults."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_STATE = "INVALID_STATE"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class Reducer:
    """
    Applies actions to one board and keeps the history of accepted actions.
    """
    board: Board
    history: list[Action] = field(default_factory=list)

    def apply(self, action: Action) -> ActionResult:
        """
        Apply an action to the board.

        Returns ActionResult with the board event or an error.
        """
        validation_error = self._validate_action(action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=ErrorCode.NOT_YOUR_TURN)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        try:
            event = handler(action)
        except InvalidArgumentError as e:
            logger.debug("Rejected %s: %s", action.describe(), e)
            return ActionResult.failure(str(e), error_code=ErrorCode.INVALID_ARGUMENT)
        except InvalidStateError as e:
            logger.debug("Rejected %s: %s", action.describe(), e)
            return ActionResult.failure(str(e), error_code=ErrorCode.INVALID_STATE)
        except ListenerError as e:
            # The move is on the board; only a listener went wrong.
            logger.warning("%s applied, but %s", action.describe(), e)
            event = e.event

        self.history.append(action)
        return ActionResult.success_with_event(event)

    def _validate_action(self, action: Action) -> str | None:
        """Returns an error message if the wrong side is acting, None otherwise."""
        if self.board.is_started() and action.side is not self.board.turn:
            return f"Not {action.side.name}'s turn"
        return None

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.PLACE: self._handle_place,
            ActionType.PASS: self._handle_pass,
        }
        return handlers.get(action_type)

    def _handle_place(self, action: Action):
        if action.card_index is None or action.row is None or action.col is None:
            raise InvalidArgumentError("Placement needs a card index, row and column")
        return self.board.place_card_in_position(action.card_index, action.row, action.col)

    def _handle_pass(self, action: Action):
        return self.board.pass_turn()


def apply_action(board: Board, action: Action) -> ActionResult:
    """
    Convenience function to apply a single action.

    Creates a throwaway Reducer, so no history is kept.
    """
    return Reducer(board=board).apply(action)
