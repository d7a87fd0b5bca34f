"""
Board events.

Every successful Board mutation returns a BoardEvent describing what
changed. Callers decide how to propagate it (listener callbacks, a queue,
a UI refresh); the board keeps no presentation references.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .state import Card, Side


class EventKind(Enum):
    """What a mutation did."""
    STARTED = "started"
    PLACED = "placed"
    PASSED = "passed"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class BoardEvent:
    """
    A single state change.

    `side` is the side that acted; `next_turn` is the side to move after
    the change. For placements, `changed_cells` lists the placement cell
    followed by every cell the card's influence touched.
    """
    kind: EventKind
    side: Side
    next_turn: Side
    game_over: bool = False
    card: Optional[Card] = None
    row: Optional[int] = None
    col: Optional[int] = None
    changed_cells: tuple[tuple[int, int], ...] = field(default_factory=tuple)


BoardListener = Callable[[BoardEvent], None]
