"""
Deck Loader - Reads deck files.

File format, repeated once per card:

    NAME COST VALUE
    XXXXX
    XXIXX
    XICIX
    XXIXX
    XXXXX

The header names the card and gives its cost and value. The five grid
lines use X (no effect), I (influenced) and C (the card itself, always in
the middle). Blank lines between cards are ignored.

Files are written from the FIRST side's point of view. Loading a deck for
the SECOND side mirrors every grid left to right, once, here; the engine
never reflects at runtime.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ...engine_core.errors import InvalidArgumentError
from ...engine_core.state import Card, Side, InfluenceSymbol, GRID_SIZE

logger = logging.getLogger(__name__)

MAX_COPIES_PER_NAME = 2


class DeckFormatError(InvalidArgumentError):
    """Raised when a deck file cannot be parsed."""

    def __init__(self, message: str, line: int | None = None, source: str = "<string>"):
        self.line = line
        self.source = source
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"{location}: {message}")


@dataclass(frozen=True)
class DeckPair:
    """The two decks a game is started with."""
    first: list[Card]
    second: list[Card]

    @property
    def max_hand_size(self) -> int:
        """A third of the first deck, as the deck files define it."""
        return len(self.first) // 3

    def for_side(self, side: Side) -> list[Card]:
        if side is Side.FIRST:
            return list(self.first)
        if side is Side.SECOND:
            return list(self.second)
        raise ValueError(f"No deck for side {side}")


def _parse_header(line: str, line_no: int, source: str) -> tuple[str, int, int]:
    parts = line.split()
    if len(parts) != 3:
        raise DeckFormatError(
            f"expected 'NAME COST VALUE', got {line.strip()!r}", line_no, source
        )
    name, cost_text, value_text = parts
    try:
        cost = int(cost_text)
        value = int(value_text)
    except ValueError:
        raise DeckFormatError(
            f"cost and value must be integers in {line.strip()!r}", line_no, source
        ) from None
    return name, cost, value


def _parse_grid_row(line: str, line_no: int, source: str) -> str:
    row = line.strip()
    if len(row) != GRID_SIZE:
        raise DeckFormatError(
            f"grid row must have {GRID_SIZE} symbols, got {row!r}", line_no, source
        )
    for ch in row:
        if ch not in {s.value for s in InfluenceSymbol}:
            raise DeckFormatError(f"unknown influence symbol {ch!r}", line_no, source)
    return row


def _check_center(rows: list[str], line_no: int, source: str) -> None:
    half = GRID_SIZE // 2
    for i, row in enumerate(rows):
        for j, ch in enumerate(row):
            is_center = i == half and j == half
            if is_center and ch != InfluenceSymbol.CENTER.value:
                raise DeckFormatError("grid center must be 'C'", line_no + i, source)
            if not is_center and ch == InfluenceSymbol.CENTER.value:
                raise DeckFormatError("'C' may only appear at the grid center", line_no + i, source)


def parse_deck(text: str, side: Side, source: str = "<string>") -> list[Card]:
    """
    Parse deck text into cards for `side`.

    At most two copies of a card name are kept; further copies are dropped
    with a warning.
    """
    if side not in (Side.FIRST, Side.SECOND):
        raise InvalidArgumentError(f"Cannot load a deck for side {side}")

    lines = text.splitlines()
    cards: list[Card] = []
    copies: dict[str, int] = {}

    index = 0
    while index < len(lines):
        if not lines[index].strip():
            index += 1
            continue

        header_no = index + 1
        name, cost, value = _parse_header(lines[index], header_no, source)

        grid_lines = lines[index + 1:index + 1 + GRID_SIZE]
        if len(grid_lines) < GRID_SIZE:
            raise DeckFormatError(
                f"card {name!r} needs {GRID_SIZE} grid lines", header_no, source
            )
        rows = [
            _parse_grid_row(line, header_no + 1 + offset, source)
            for offset, line in enumerate(grid_lines)
        ]
        _check_center(rows, header_no + 1, source)
        index += 1 + GRID_SIZE

        try:
            card = Card.from_rows(name, cost, value, Side.FIRST, rows)
        except InvalidArgumentError as e:
            raise DeckFormatError(str(e), header_no, source) from e
        if side is Side.SECOND:
            card = card.reflected(owner=Side.SECOND)

        if copies.get(name, 0) >= MAX_COPIES_PER_NAME:
            logger.warning(
                "%s:%d: dropping extra copy of %r (max %d per deck)",
                source, header_no, name, MAX_COPIES_PER_NAME,
            )
            continue
        copies[name] = copies.get(name, 0) + 1
        cards.append(card)

    logger.debug("Loaded %d card(s) for %s from %s", len(cards), side.name, source)
    return cards


def load_deck(path: str | Path, side: Side) -> list[Card]:
    """Load a deck file for `side`."""
    path = Path(path)
    return parse_deck(path.read_text(encoding="utf-8"), side, source=str(path))


def load_decks(first_path: str | Path, second_path: str | Path) -> DeckPair:
    """Load one deck file per side. The same file may be used for both."""
    return DeckPair(
        first=load_deck(first_path, Side.FIRST),
        second=load_deck(second_path, Side.SECOND),
    )


def format_deck(cards: Iterable[Card]) -> str:
    """
    Write cards in deck file format.

    Grids are written in FIRST orientation, so a SECOND deck round-trips
    through load_deck(..., Side.SECOND).
    """
    blocks = []
    for card in cards:
        oriented = card.reflected() if card.owner is Side.SECOND else card
        blocks.append("\n".join([f"{card.name} {card.cost} {card.value}", *oriented.grid_rows()]))
    return "\n".join(blocks) + "\n" if blocks else ""
