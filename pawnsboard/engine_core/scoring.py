"""
Scoring - Row and total scores.

Only placed cards score. In each row the side with the larger sum of card
values takes the whole row: its own sum goes to its total and the other
side gets nothing for that row. A tied row scores for nobody.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence

from .state import Cell, Side


@dataclass(frozen=True)
class RowScore:
    """Sum of placed card values per side for one row."""
    first: int
    second: int

    @property
    def winner(self) -> Side:
        if self.first > self.second:
            return Side.FIRST
        if self.second > self.first:
            return Side.SECOND
        return Side.NONE

    @property
    def score(self) -> int:
        """Points the row awards its winner (0 on a tie)."""
        if self.first == self.second:
            return 0
        return max(self.first, self.second)

    def for_side(self, side: Side) -> int:
        if side is Side.FIRST:
            return self.first
        if side is Side.SECOND:
            return self.second
        return 0


def score_row(cells: Iterable[Cell]) -> RowScore:
    first = 0
    second = 0
    for cell in cells:
        if not cell.has_card():
            continue
        if cell.owner is Side.FIRST:
            first += cell.score
        elif cell.owner is Side.SECOND:
            second += cell.score
    return RowScore(first=first, second=second)


def total_score(grid: Sequence[Sequence[Cell]], side: Side) -> int:
    """Sum of the rows `side` wins outright."""
    total = 0
    for cells in grid:
        row = score_row(cells)
        if row.winner is side and side is not Side.NONE:
            total += row.score
    return total


def winner(grid: Sequence[Sequence[Cell]]) -> Side:
    """Side with the strictly larger total, or NONE on a tie."""
    first = total_score(grid, Side.FIRST)
    second = total_score(grid, Side.SECOND)
    if first > second:
        return Side.FIRST
    if second > first:
        return Side.SECOND
    return Side.NONE
