"""
Queens - The standard influence card game.

Key mechanics:
- Each side starts with one pawn per row on its edge column
- Cards cost 1-3 pawns and can only go where the side already has enough
- A placed card spreads or captures pawns through its influence grid
- Each row goes to the side with the higher sum of card values

This module contains:
- The standard card designs and deck builder
- The deck file loader
- Board setup helpers
"""

from .cards import CardDesign, STANDARD_DESIGNS, standard_deck, get_design_by_name
from .deck_loader import (
    DeckFormatError,
    DeckPair,
    parse_deck,
    load_deck,
    load_decks,
    format_deck,
)
from .setup import create_board, create_board_from_files

__all__ = [
    "CardDesign",
    "STANDARD_DESIGNS",
    "standard_deck",
    "get_design_by_name",
    "DeckFormatError",
    "DeckPair",
    "parse_deck",
    "load_deck",
    "load_decks",
    "format_deck",
    "create_board",
    "create_board_from_files",
]
