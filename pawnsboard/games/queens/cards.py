"""
Standard Cards - Built-in card designs.

Each design is written in FIRST-side orientation: the card sits at the
C in the middle of the 5x5 grid, and every I marks a cell it influences.
SECOND-side copies are mirrored left to right when a deck is built.

The standard deck uses two copies of most designs so it stays within the
two-copies-per-name rule of deck files.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.state import Card, Side, parse_influence, InfluenceGrid


@dataclass(frozen=True)
class CardDesign:
    """
    A side-independent card definition.

    Gets converted to a Card for a specific side.
    """
    name: str
    cost: int
    value: int
    rows: tuple[str, ...]

    @property
    def influence(self) -> InfluenceGrid:
        return parse_influence(self.rows)

    def to_card(self, side: Side = Side.FIRST) -> Card:
        card = Card.from_rows(self.name, self.cost, self.value, Side.FIRST, self.rows)
        if side is Side.SECOND:
            return card.reflected(owner=Side.SECOND)
        return card


# ============================================================================
# Cost 1
# ============================================================================

SECURITY_OFFICER = CardDesign(
    name="SecurityOfficer",
    cost=1,
    value=1,
    rows=(
        "XXXXX",
        "XXIXX",
        "XICIX",
        "XXIXX",
        "XXXXX",
    ),
)

LEVRIKON = CardDesign(
    name="Levrikon",
    cost=1,
    value=2,
    rows=(
        "XXXXX",
        "XXIXX",
        "XXCXX",
        "XXIXX",
        "XXXXX",
    ),
)

GRASSLANDS_WOLF = CardDesign(
    name="GrasslandsWolf",
    cost=1,
    value=2,
    rows=(
        "XXXXX",
        "XIXIX",
        "XXCXX",
        "XIXIX",
        "XXXXX",
    ),
)

MANDRAGORA = CardDesign(
    name="Mandragora",
    cost=1,
    value=1,
    rows=(
        "XXXXX",
        "XXXIX",
        "XXCIX",
        "XXXIX",
        "XXXXX",
    ),
)

CRYSTALLINE_CRAB = CardDesign(
    name="CrystallineCrab",
    cost=1,
    value=1,
    rows=(
        "XXXXX",
        "XXXXX",
        "XXCII",
        "XXXXX",
        "XXXXX",
    ),
)

# ============================================================================
# Cost 2
# ============================================================================

RIOT_TROOPER = CardDesign(
    name="RiotTrooper",
    cost=2,
    value=3,
    rows=(
        "XXXXX",
        "XXIXX",
        "XXCII",
        "XXIXX",
        "XXXXX",
    ),
)

# ============================================================================
# Cost 3
# ============================================================================

ELPHADUNK = CardDesign(
    name="Elphadunk",
    cost=3,
    value=5,
    rows=(
        "XXXXX",
        "XIIIX",
        "XICIX",
        "XIIIX",
        "XXXXX",
    ),
)

ARCHDRAGON = CardDesign(
    name="Archdragon",
    cost=3,
    value=6,
    rows=(
        "XXIXX",
        "XXXXX",
        "IXCXI",
        "XXXXX",
        "XXIXX",
    ),
)


STANDARD_DESIGNS: list[CardDesign] = [
    SECURITY_OFFICER,
    LEVRIKON,
    GRASSLANDS_WOLF,
    MANDRAGORA,
    CRYSTALLINE_CRAB,
    RIOT_TROOPER,
    ELPHADUNK,
    ARCHDRAGON,
]

STANDARD_DECK_SIZE = 15


def get_design_by_name(name: str) -> CardDesign | None:
    """Look up a standard design by card name."""
    for design in STANDARD_DESIGNS:
        if design.name == name:
            return design
    return None


def standard_deck(side: Side, size: int = STANDARD_DECK_SIZE) -> list[Card]:
    """
    Build a deck for `side` by cycling through the standard designs.

    With the default size every design appears at most twice.
    """
    if size < 1:
        raise ValueError("Deck size must be positive")
    return [
        STANDARD_DESIGNS[i % len(STANDARD_DESIGNS)].to_card(side)
        for i in range(size)
    ]
