"""
Pytest fixtures for Pawnsboard tests.
"""

import pytest

from ..engine_core.board import Board
from ..engine_core.state import Card, Side


# Influence grids used across the tests (FIRST orientation)
CENTER_ONLY = ("XXXXX", "XXXXX", "XXCXX", "XXXXX", "XXXXX")
PLUS = ("XXXXX", "XXIXX", "XICIX", "XXIXX", "XXXXX")
RIGHT_PAIR = ("XXXXX", "XXXXX", "XXCII", "XXXXX", "XXXXX")


def make_card(name="Pawnling", cost=1, value=1, owner=Side.FIRST, rows=CENTER_ONLY) -> Card:
    """Build a card from grid rows."""
    return Card.from_rows(name, cost, value, owner, rows)


def make_deck(owner, size=15, head=(), **card_kwargs) -> list[Card]:
    """
    Build a deck: the `head` cards first, then plain filler cards
    until the deck has `size` cards.
    """
    deck = list(head)
    while len(deck) < size:
        deck.append(make_card(owner=owner, **card_kwargs))
    return deck


@pytest.fixture
def new_board() -> Board:
    """A 3x5 board that has not been started."""
    return Board(3, 5)


@pytest.fixture
def first_deck() -> list[Card]:
    return make_deck(Side.FIRST)


@pytest.fixture
def second_deck() -> list[Card]:
    return make_deck(Side.SECOND)


@pytest.fixture
def board(new_board: Board, first_deck, second_deck) -> Board:
    """A started 3x5 board; both sides hold five cost-1, value-1 cards."""
    new_board.start_game(first_deck, second_deck, 5)
    return new_board


@pytest.fixture
def plus_board(new_board: Board, second_deck) -> Board:
    """
    A started 3x5 board where FIRST's hand is:
    [0] Plus (cost 1, value 1, influences the four neighbours)
    [1] Heavy (cost 2, value 3, center only)
    [2..4] plain filler
    """
    first = make_deck(
        Side.FIRST,
        head=[
            make_card("Plus", 1, 1, Side.FIRST, PLUS),
            make_card("Heavy", 2, 3, Side.FIRST),
        ],
    )
    new_board.start_game(first, second_deck, 5)
    return new_board


@pytest.fixture
def deck_text() -> str:
    """Deck file text with two cards."""
    return (
        "Guard 1 1\n"
        "XXXXX\n"
        "XXIXX\n"
        "XICIX\n"
        "XXIXX\n"
        "XXXXX\n"
        "\n"
        "Crab 2 3\n"
        "XXXXX\n"
        "XXXXX\n"
        "XXCII\n"
        "XXXXX\n"
        "XXXXX\n"
    )
