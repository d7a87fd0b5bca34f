"""
Game Setup - Builds and starts boards.

Decks come from deck files or, when none are given, from the standard card
set. Decks are dealt in order; shuffling is only applied when a seed is
given, so unseeded games are fully deterministic.
"""

from __future__ import annotations
import random
from typing import Optional, Sequence

from ...engine_core.board import Board
from ...engine_core.state import Card, Side
from .cards import standard_deck, STANDARD_DECK_SIZE
from .deck_loader import load_decks


def _standard_size(rows: int, cols: int) -> int:
    return max(STANDARD_DECK_SIZE, rows * cols)


def create_board(
    rows: int = 3,
    cols: int = 5,
    hand_size: int = 5,
    first_deck: Optional[Sequence[Card]] = None,
    second_deck: Optional[Sequence[Card]] = None,
    max_hand_size: Optional[int] = None,
    shuffle_seed: Optional[int] = None,
) -> Board:
    """
    Create a board and start the game.

    Args:
        rows: Board height
        cols: Board width (odd, greater than one)
        hand_size: Cards dealt to each side
        first_deck: FIRST side's deck (standard deck if omitted)
        second_deck: SECOND side's deck (standard deck if omitted)
        max_hand_size: Hand limit for draws (a third of the first deck if omitted)
        shuffle_seed: Shuffle both decks with this seed before dealing

    Returns:
        A started Board with FIRST to move
    """
    size = _standard_size(rows, cols)
    first = list(first_deck) if first_deck is not None else standard_deck(Side.FIRST, size)
    second = list(second_deck) if second_deck is not None else standard_deck(Side.SECOND, size)

    if shuffle_seed is not None:
        rng = random.Random(shuffle_seed)
        rng.shuffle(first)
        rng.shuffle(second)

    board = Board(rows, cols, max_hand_size=max_hand_size)
    board.start_game(first, second, hand_size)
    return board


def create_board_from_files(
    first_path: str,
    second_path: str,
    rows: int = 3,
    cols: int = 5,
    hand_size: int = 5,
    shuffle_seed: Optional[int] = None,
) -> Board:
    """Create and start a board with decks loaded from files."""
    decks = load_decks(first_path, second_path)
    return create_board(
        rows=rows,
        cols=cols,
        hand_size=hand_size,
        first_deck=decks.first,
        second_deck=decks.second,
        max_hand_size=decks.max_hand_size,
        shuffle_seed=shuffle_seed,
    )
