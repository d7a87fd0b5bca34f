"""
Board State - Sides, cards and cells.

Design principles:
- Cards are immutable definitions; equality is by value
- A cell's content is a tagged union (empty / pawns / card), so a cell
  holding a card with pawns on it cannot be built
- Cells are the only mutable piece; the Board owns them
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Sequence, Union

from .errors import InvalidArgumentError


MAX_PAWNS = 3
MIN_COST = 1
MAX_COST = 3
GRID_SIZE = 5


class Side(Enum):
    """The two competing sides, plus NONE for unowned things."""
    FIRST = "first"
    SECOND = "second"
    NONE = "none"

    @property
    def opponent(self) -> Side:
        if self is Side.FIRST:
            return Side.SECOND
        if self is Side.SECOND:
            return Side.FIRST
        return Side.NONE

    @property
    def is_player(self) -> bool:
        return self is not Side.NONE

    @property
    def color(self) -> str:
        """Table color the side plays (first is red, second is blue)."""
        return {Side.FIRST: "red", Side.SECOND: "blue"}.get(self, "none")


PLAYER_SIDES = (Side.FIRST, Side.SECOND)


class GamePhase(Enum):
    """High-level game phases."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    OVER = "over"


class InfluenceSymbol(Enum):
    """Symbols of a card's influence grid."""
    NONE = "X"
    INFLUENCED = "I"
    CENTER = "C"

    @classmethod
    def parse(cls, char: str) -> InfluenceSymbol:
        try:
            return cls(char)
        except ValueError:
            raise InvalidArgumentError(f"Unknown influence symbol: {char!r}") from None


InfluenceGrid = tuple[tuple[InfluenceSymbol, ...], ...]


def parse_influence(rows: Sequence[str]) -> InfluenceGrid:
    """Build an influence grid from rows of X/I/C characters."""
    return tuple(tuple(InfluenceSymbol.parse(ch) for ch in row) for row in rows)


def reflect_influence(grid: InfluenceGrid) -> InfluenceGrid:
    """Mirror a grid left to right (the second side's view of a card)."""
    return tuple(tuple(reversed(row)) for row in grid)


@dataclass(frozen=True)
class Card:
    """
    A placeable card.

    Two cards are equal when name, cost, value, owner and influence grid
    all match. The grid is stored in the owner's orientation: a SECOND card
    already carries the mirrored pattern.
    """
    name: str
    cost: int
    value: int
    owner: Side
    influence: InfluenceGrid

    def __post_init__(self):
        if not isinstance(self.cost, int) or not MIN_COST <= self.cost <= MAX_COST:
            raise InvalidArgumentError(
                f"Card cost must be between {MIN_COST} and {MAX_COST}, got {self.cost}"
            )
        if not isinstance(self.value, int) or self.value < 0:
            raise InvalidArgumentError(f"Card value must be non-negative, got {self.value}")
        if self.owner not in PLAYER_SIDES:
            raise InvalidArgumentError(f"Card owner must be FIRST or SECOND, got {self.owner}")

        grid = tuple(
            tuple(InfluenceSymbol.parse(s) if isinstance(s, str) else s for s in row)
            for row in self.influence
        )
        if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
            raise InvalidArgumentError(
                f"Influence grid must be {GRID_SIZE}x{GRID_SIZE} for card {self.name!r}"
            )
        half = GRID_SIZE // 2
        if grid[half][half] is not InfluenceSymbol.CENTER:
            raise InvalidArgumentError(f"Grid center of card {self.name!r} must be 'C'")
        centers = sum(row.count(InfluenceSymbol.CENTER) for row in grid)
        if centers != 1:
            raise InvalidArgumentError(
                f"'C' may only appear at the grid center of card {self.name!r}"
            )
        object.__setattr__(self, "influence", grid)

    @classmethod
    def from_rows(
        cls, name: str, cost: int, value: int, owner: Side, rows: Sequence[str]
    ) -> Card:
        """Build a card from grid rows written as strings, e.g. "XXIXX"."""
        return cls(name=name, cost=cost, value=value, owner=owner, influence=parse_influence(rows))

    def reflected(self, owner: Side | None = None) -> Card:
        """Return this card with a mirrored grid, optionally for another owner."""
        return Card(
            name=self.name,
            cost=self.cost,
            value=self.value,
            owner=owner or self.owner,
            influence=reflect_influence(self.influence),
        )

    def influence_offsets(self) -> Iterator[tuple[int, int]]:
        """Yield (row, col) offsets from the center for each influenced cell."""
        half = len(self.influence) // 2
        for i, row in enumerate(self.influence):
            for j, symbol in enumerate(row):
                if symbol is InfluenceSymbol.INFLUENCED:
                    yield i - half, j - half

    def grid_rows(self) -> list[str]:
        return ["".join(s.value for s in row) for row in self.influence]

    def __str__(self) -> str:
        return self.owner.color[0].upper()


@dataclass(frozen=True)
class EmptyContent:
    """No card and no pawns."""


@dataclass(frozen=True)
class PawnContent:
    """One to three pawns owned by a side."""
    count: int
    owner: Side

    def __post_init__(self):
        if not 1 <= self.count <= MAX_PAWNS:
            raise InvalidArgumentError(f"Pawn count must be between 1 and {MAX_PAWNS}")
        if self.owner not in PLAYER_SIDES:
            raise InvalidArgumentError(f"Pawns must belong to FIRST or SECOND, got {self.owner}")


@dataclass(frozen=True)
class CardContent:
    """A placed card. Placed cards stay for the rest of the game."""
    card: Card


CellContent = Union[EmptyContent, PawnContent, CardContent]


@dataclass
class Cell:
    """
    A slot on the board.

    The content is replaced wholesale on every change, so the cell is
    always in exactly one of its three states.
    """
    content: CellContent = field(default_factory=EmptyContent)

    @classmethod
    def empty(cls) -> Cell:
        return cls()

    @classmethod
    def with_pawns(cls, count: int, owner: Side) -> Cell:
        """Create a pawn cell. A count of zero gives an empty cell."""
        if not isinstance(count, int) or not 0 <= count <= MAX_PAWNS:
            raise InvalidArgumentError(f"Invalid pawn amount: {count}")
        if count == 0:
            return cls()
        return cls(PawnContent(count=count, owner=owner))

    @classmethod
    def with_card(cls, card: Card) -> Cell:
        return cls(CardContent(card=card))

    # Queries

    def has_card(self) -> bool:
        return isinstance(self.content, CardContent)

    def has_pawns(self) -> bool:
        return isinstance(self.content, PawnContent)

    def is_empty(self) -> bool:
        return isinstance(self.content, EmptyContent)

    @property
    def pawn_count(self) -> int:
        if isinstance(self.content, PawnContent):
            return self.content.count
        return 0

    @property
    def owner(self) -> Side:
        if isinstance(self.content, PawnContent):
            return self.content.owner
        if isinstance(self.content, CardContent):
            return self.content.card.owner
        return Side.NONE

    @property
    def score(self) -> int:
        """Value this cell contributes to its row (placed cards only)."""
        if isinstance(self.content, CardContent):
            return self.content.card.value
        return 0

    def get_card(self) -> Card:
        if not isinstance(self.content, CardContent):
            raise InvalidArgumentError("Cannot get card from a cell without a card")
        return self.content.card

    # Mutations

    def add_pawn(self, owner_card: Card, amount: int) -> None:
        """
        Add pawns owned by the card's side.

        Callers clamp `amount` so the result stays within three pawns.
        """
        if self.has_card():
            raise InvalidArgumentError("Cannot add pawn to a cell with a card")
        if self.pawn_count >= MAX_PAWNS:
            raise InvalidArgumentError("Cannot add more pawns to current cell")
        if amount < 0:
            raise InvalidArgumentError(f"Cannot add a negative number of pawns: {amount}")

        new_count = self.pawn_count + amount
        if new_count == 0:
            return
        self.content = PawnContent(count=new_count, owner=owner_card.owner)

    def change_ownership(self) -> None:
        """Flip the owner of the pawns in this cell."""
        if isinstance(self.content, PawnContent):
            self.content = PawnContent(
                count=self.content.count,
                owner=self.content.owner.opponent,
            )

    def place_card(self, card: Card) -> None:
        """Replace the pawns in this cell with a card."""
        if self.has_card():
            raise InvalidArgumentError("Cell already holds a card")
        self.content = CardContent(card=card)

    def copy(self) -> Cell:
        # Contents and cards are frozen, so sharing them is safe.
        return Cell(self.content)

    def __str__(self) -> str:
        if isinstance(self.content, CardContent):
            return str(self.content.card)
        if isinstance(self.content, PawnContent):
            return str(self.content.count)
        return "_"
