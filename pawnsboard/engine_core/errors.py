"""
Engine errors.

Two kinds are raised by the engine:
- InvalidArgumentError: the input is structurally impossible
  (out-of-range index or coordinate, malformed card parameters)
- InvalidStateError: the input is well-formed but illegal right now
  (game not started or over, occupied cell, too few pawns, wrong owner)

Both leave the board untouched. ListenerError is the exception: it reports
a listener failure after a change was already committed.
"""


class BoardError(Exception):
    """Base class for all engine errors."""


class InvalidArgumentError(BoardError, ValueError):
    """Raised when a caller passes a structurally impossible value."""


class InvalidStateError(BoardError):
    """Raised when an operation is not legal in the current game state."""


class ListenerError(BoardError):
    """
    Raised after a committed change when a listener failed.

    Every listener still received `event`; the first failure is chained as
    the cause. Unlike the other errors, the board HAS changed.
    """

    def __init__(self, message: str, event):
        super().__init__(message)
        self.event = event
