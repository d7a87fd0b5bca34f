"""
Pydantic Schemas - Read-only board snapshots for observers.

Observers (front ends, bots running elsewhere, replay tools) pull state
through these models instead of holding a reference to the Board. A
snapshot is a full copy: nothing in it changes when the board does.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .engine_core.action import Action
from .engine_core.board import Board
from .engine_core.state import Card, Cell, GamePhase, Side


# =============================================================================
# Enums
# =============================================================================

class SideName(str, Enum):
    """Side names as they appear in snapshots and requests."""
    FIRST = "first"
    SECOND = "second"
    NONE = "none"

    def to_side(self) -> Side:
        return Side(self.value)


class CellState(str, Enum):
    """Which of the three cell states a cell is in."""
    EMPTY = "empty"
    PAWNS = "pawns"
    CARD = "card"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    name: str
    cost: int = Field(ge=1, le=3)
    value: int = Field(ge=0)
    owner: SideName
    influence: list[str] = Field(description="Five rows of X/I/C symbols")

    @classmethod
    def from_card(cls, card: Card) -> CardInfo:
        return cls(
            name=card.name,
            cost=card.cost,
            value=card.value,
            owner=SideName(card.owner.value),
            influence=card.grid_rows(),
        )


class CellInfo(BaseModel):
    """One board cell."""
    row: int
    col: int
    state: CellState
    pawn_count: int = Field(ge=0, le=3)
    owner: SideName
    card: Optional[CardInfo] = None

    @classmethod
    def from_cell(cls, row: int, col: int, cell: Cell) -> CellInfo:
        if cell.has_card():
            state = CellState.CARD
        elif cell.has_pawns():
            state = CellState.PAWNS
        else:
            state = CellState.EMPTY
        return cls(
            row=row,
            col=col,
            state=state,
            pawn_count=cell.pawn_count,
            owner=SideName(cell.owner.value),
            card=CardInfo.from_card(cell.get_card()) if cell.has_card() else None,
        )


class RowScoreInfo(BaseModel):
    """Card value sums for one row."""
    row: int
    first: int = 0
    second: int = 0
    score: int = 0
    winner: SideName = SideName.NONE


class BoardSnapshot(BaseModel):
    """Everything an observer can see about a board."""
    height: int
    width: int
    phase: str
    turn: SideName
    game_over: bool
    cells: list[list[CellInfo]] = Field(default_factory=list)
    first_hand: list[CardInfo] = Field(default_factory=list)
    second_hand: list[CardInfo] = Field(default_factory=list)
    first_deck_size: int = 0
    second_deck_size: int = 0
    row_scores: list[RowScoreInfo] = Field(default_factory=list)
    first_total: int = 0
    second_total: int = 0
    winner: SideName = SideName.NONE

    def cell(self, row: int, col: int) -> CellInfo:
        return self.cells[row][col]


class ActionRequest(BaseModel):
    """A move submitted by a front end."""
    side: SideName
    pass_turn: bool = False
    card_index: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None

    def to_action(self) -> Action:
        side = self.side.to_side()
        if self.pass_turn:
            return Action.pass_turn(side)
        if self.card_index is None or self.row is None or self.col is None:
            raise ValueError("card_index, row and col are required unless passing")
        return Action.place(side, self.card_index, self.row, self.col)


# =============================================================================
# Builders
# =============================================================================

def snapshot_board(board: Board) -> BoardSnapshot:
    """Build a snapshot of the board's current state."""
    cells = [
        [CellInfo.from_cell(r, c, cell) for c, cell in enumerate(row)]
        for r, row in enumerate(board.rows())
    ]

    row_scores = []
    for r in range(board.height):
        scores = board.row_scores(r)
        row_scores.append(RowScoreInfo(
            row=r,
            first=scores.first,
            second=scores.second,
            score=scores.score,
            winner=SideName(scores.winner.value),
        ))

    started = board.phase is not GamePhase.NOT_STARTED
    first_hand = board.get_hand(Side.FIRST) if started else []
    second_hand = board.get_hand(Side.SECOND) if started else []

    return BoardSnapshot(
        height=board.height,
        width=board.width,
        phase=board.phase.value,
        turn=SideName(board.turn.value),
        game_over=board.is_game_over(),
        cells=cells,
        first_hand=[CardInfo.from_card(c) for c in first_hand],
        second_hand=[CardInfo.from_card(c) for c in second_hand],
        first_deck_size=board.remaining_deck_size(Side.FIRST),
        second_deck_size=board.remaining_deck_size(Side.SECOND),
        row_scores=row_scores,
        first_total=board.total_score(Side.FIRST),
        second_total=board.total_score(Side.SECOND),
        winner=SideName(board.winner().value),
    )
