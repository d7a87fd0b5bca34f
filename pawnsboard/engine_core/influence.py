"""
Influence propagation.

When a card is placed, each INFLUENCED symbol in its 5x5 grid targets the
board cell at the same offset from the placement. What happens to a target
depends only on its content:

- card:            nothing, placed cards are immune
- empty:           one pawn of the placing side
- own pawns:       one more pawn, capped at three
- opponent pawns:  ownership flips, count unchanged

Each offset maps to a distinct cell, so a single pass in any order gives
the same result.
"""

from __future__ import annotations
from typing import Sequence

from .state import Card, Cell, CardContent, EmptyContent, PawnContent, MAX_PAWNS


def influence_targets(
    card: Card, row: int, col: int, height: int, width: int
) -> list[tuple[int, int]]:
    """In-bounds board coordinates influenced by `card` placed at (row, col)."""
    targets = []
    for d_row, d_col in card.influence_offsets():
        target_row, target_col = row + d_row, col + d_col
        if 0 <= target_row < height and 0 <= target_col < width:
            targets.append((target_row, target_col))
    return targets


def influence_cell(cell: Cell, card: Card) -> bool:
    """
    Apply one unit of `card`'s influence to `cell`.

    Returns True if the cell changed.
    """
    content = cell.content
    if isinstance(content, CardContent):
        return False
    if isinstance(content, EmptyContent):
        cell.add_pawn(card, 1)
        return True
    if isinstance(content, PawnContent):
        if content.owner == card.owner:
            amount = min(MAX_PAWNS - content.count, 1)
            if amount == 0:
                return False
            cell.add_pawn(card, amount)
            return True
        cell.change_ownership()
        return True
    raise TypeError(f"Unknown cell content: {content!r}")


def apply_influence(
    grid: Sequence[Sequence[Cell]], card: Card, row: int, col: int
) -> list[tuple[int, int]]:
    """
    Apply `card`'s influence for a placement at (row, col).

    Returns the coordinates of cells that changed.
    """
    height = len(grid)
    width = len(grid[0]) if height else 0

    changed = []
    for target_row, target_col in influence_targets(card, row, col, height, width):
        if influence_cell(grid[target_row][target_col], card):
            changed.append((target_row, target_col))
    return changed
