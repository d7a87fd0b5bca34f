"""
Board - The game aggregate.

The board owns the grid of cells, both hands and decks, the side to move,
the game phase and the per-side pass flags. All state changes go through
start_game(), place_card_in_position() and pass_turn(); each returns a
BoardEvent and then notifies registered listeners in order.

Every mutator checks its preconditions on read-only state before touching
anything, so a failed call leaves the board exactly as it was.

The board does no locking. Callers sharing one board between threads must
serialize access (the session layer holds one lock per game).
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence

from .errors import InvalidArgumentError, InvalidStateError, ListenerError
from .events import BoardEvent, BoardListener, EventKind
from .influence import apply_influence
from .scoring import RowScore, score_row, total_score, winner as grid_winner
from .state import Card, Cell, GamePhase, Side, PLAYER_SIDES

logger = logging.getLogger(__name__)


class Board:
    """
    A rectangular board for two sides.

    Column 0 starts with one FIRST pawn per row and the last column with
    one SECOND pawn per row. Width must be odd and greater than one so the
    board has a unique center column.
    """

    def __init__(self, height: int, width: int, max_hand_size: Optional[int] = None):
        if not isinstance(height, int) or height < 1:
            raise InvalidArgumentError("Board must have at least one row")
        if not isinstance(width, int) or width <= 1 or width % 2 == 0:
            raise InvalidArgumentError("Board must have more than one column and be odd")
        if max_hand_size is not None and max_hand_size < 1:
            raise InvalidArgumentError("Maximum hand size must be positive")

        self._height = height
        self._width = width
        self._max_hand_size = max_hand_size

        self._grid: list[list[Cell]] = [
            [self._initial_cell(col) for col in range(width)]
            for _ in range(height)
        ]
        self._hands: dict[Side, list[Card]] = {side: [] for side in PLAYER_SIDES}
        self._decks: dict[Side, list[Card]] = {side: [] for side in PLAYER_SIDES}
        self._last_passed: dict[Side, bool] = {side: False for side in PLAYER_SIDES}

        self._phase = GamePhase.NOT_STARTED
        self._turn = Side.NONE

        self._listeners: list[BoardListener] = []
        self._notifying = False

    def _initial_cell(self, col: int) -> Cell:
        if col == 0:
            return Cell.with_pawns(1, Side.FIRST)
        if col == self._width - 1:
            return Cell.with_pawns(1, Side.SECOND)
        return Cell.empty()

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_listener(self, listener: BoardListener) -> None:
        """Register a callback invoked with each BoardEvent."""
        self._listeners.append(listener)

    def remove_listener(self, listener: BoardListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: BoardEvent) -> BoardEvent:
        """
        Deliver `event` to every listener in registration order.

        A failing listener does not stop delivery to the rest. The first
        failure is re-raised afterwards as ListenerError, which carries the
        event of the already committed change.
        """
        failure: Exception | None = None
        self._notifying = True
        try:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as e:
                    logger.warning("Listener %r failed on %s: %s", listener, event.kind.value, e)
                    if failure is None:
                        failure = e
        finally:
            self._notifying = False
        if failure is not None:
            raise ListenerError(f"A listener failed: {failure}", event) from failure
        return event

    def _check_not_notifying(self) -> None:
        if self._notifying:
            raise InvalidStateError("Cannot change the board from inside a listener")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_game(
        self,
        first_deck: Sequence[Card],
        second_deck: Sequence[Card],
        hand_size: int,
    ) -> BoardEvent:
        """
        Deal both hands and hand the first turn to FIRST.

        The decks are copied; changing the caller's lists afterwards has no
        effect on the game. May be called once.
        """
        self._check_not_notifying()
        if self._phase is not GamePhase.NOT_STARTED:
            raise InvalidStateError("Game already started")

        if first_deck is None or second_deck is None:
            raise InvalidArgumentError("Both decks are required")
        for side, deck in ((Side.FIRST, first_deck), (Side.SECOND, second_deck)):
            for card in deck:
                if not isinstance(card, Card):
                    raise InvalidArgumentError(f"Deck contains a non-card entry: {card!r}")
                if card.owner is not side:
                    raise InvalidArgumentError(
                        f"{side.name} deck contains {card.name!r} owned by {card.owner.name}"
                    )

        max_hand_size = self._max_hand_size
        if max_hand_size is None:
            max_hand_size = len(first_deck) // 3
        if not isinstance(hand_size, int) or hand_size <= 0 or hand_size > max_hand_size:
            raise InvalidArgumentError(
                f"Hand size must be between 1 and {max_hand_size}, got {hand_size}"
            )

        required = self._width * self._height
        if len(first_deck) < required or len(second_deck) < required:
            raise InvalidArgumentError(
                f"Decks do not contain enough cards to fill the board ({required} needed)"
            )
        if len(first_deck) < hand_size or len(second_deck) < hand_size:
            raise InvalidArgumentError("Not enough cards in the deck to deal hands")

        self._max_hand_size = max_hand_size
        for side, deck in ((Side.FIRST, first_deck), (Side.SECOND, second_deck)):
            cards = list(deck)
            self._hands[side] = cards[:hand_size]
            self._decks[side] = cards[hand_size:]
            self._last_passed[side] = False

        self._phase = GamePhase.IN_PROGRESS
        self._turn = Side.FIRST

        logger.info(
            "Game started on %dx%d board, hand size %d",
            self._height, self._width, hand_size,
        )
        return self._emit(BoardEvent(
            kind=EventKind.STARTED,
            side=Side.NONE,
            next_turn=self._turn,
        ))

    # =========================================================================
    # Placement
    # =========================================================================

    def check_placement(self, card_index: int, row: int, col: int) -> Card:
        """
        Run every placement check without changing anything.

        Returns the card that would be placed. Raises the same error that
        place_card_in_position() would.
        """
        if self._phase is not GamePhase.IN_PROGRESS:
            raise InvalidStateError("Game has not started or is already finished")

        if not self.is_valid_position(row, col):
            raise InvalidArgumentError(f"Invalid board position: ({row}, {col})")

        hand = self._hands[self._turn]
        if not isinstance(card_index, int) or card_index < 0 or card_index >= len(hand):
            raise InvalidArgumentError(f"Invalid card index: {card_index}")
        card = hand[card_index]

        target = self._grid[row][col]
        if target.has_card():
            raise InvalidStateError("Cannot place a card on a cell that already has a card")
        if target.pawn_count < card.cost:
            raise InvalidStateError(
                f"Not enough pawns to place this card ({target.pawn_count} < {card.cost})"
            )
        if target.is_empty():
            raise InvalidStateError("Target cell is empty")
        if target.owner is not self._turn:
            raise InvalidStateError("Target pawns belong to the other side")

        return card

    def can_place(self, card_index: int, row: int, col: int) -> bool:
        """True if place_card_in_position() would succeed."""
        try:
            self.check_placement(card_index, row, col)
        except (InvalidArgumentError, InvalidStateError):
            return False
        return True

    def place_card_in_position(self, card_index: int, row: int, col: int) -> BoardEvent:
        """
        Place the current side's card at (row, col).

        Applies the card's influence, draws a replacement card when the deck
        has one and the hand is below the maximum, and passes the turn.
        """
        self._check_not_notifying()
        card = self.check_placement(card_index, row, col)
        side = self._turn

        self._grid[row][col].place_card(card)
        hand = self._hands[side]
        hand.pop(card_index)

        changed = apply_influence(self._grid, card, row, col)

        deck = self._decks[side]
        if deck and len(hand) < self._max_hand_size:
            hand.append(deck.pop(0))

        self._last_passed[side] = False
        self._turn = side.opponent

        logger.debug(
            "%s placed %s at (%d, %d), influenced %d cell(s)",
            side.name, card.name, row, col, len(changed),
        )

        game_over = False
        if self.empty_cell_count() == 0:
            self._phase = GamePhase.OVER
            game_over = True
            logger.info("No empty cells left, game over (winner: %s)", self.winner().name)

        return self._emit(BoardEvent(
            kind=EventKind.PLACED,
            side=side,
            next_turn=self._turn,
            game_over=game_over,
            card=card,
            row=row,
            col=col,
            changed_cells=((row, col), *changed),
        ))

    # =========================================================================
    # Passing
    # =========================================================================

    def pass_turn(self) -> BoardEvent:
        """
        Pass instead of placing a card.

        If the other side's last action was also a pass, the game ends.
        """
        self._check_not_notifying()
        if self._phase is not GamePhase.IN_PROGRESS:
            raise InvalidStateError("Game has not started or is already finished")

        side = self._turn
        self._last_passed[side] = True
        self._turn = side.opponent

        if self._last_passed[side.opponent]:
            self._phase = GamePhase.OVER
            logger.info(
                "Both sides passed consecutively, game over (winner: %s)",
                self.winner().name,
            )
            return self._emit(BoardEvent(
                kind=EventKind.GAME_OVER,
                side=side,
                next_turn=self._turn,
                game_over=True,
            ))

        logger.debug("%s passed", side.name)
        return self._emit(BoardEvent(
            kind=EventKind.PASSED,
            side=side,
            next_turn=self._turn,
        ))

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def turn(self) -> Side:
        """Side to move (NONE before the game starts)."""
        return self._turn

    @property
    def max_hand_size(self) -> Optional[int]:
        return self._max_hand_size

    def is_started(self) -> bool:
        return self._phase is not GamePhase.NOT_STARTED

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def _require_position(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise InvalidArgumentError(f"Given row and column is invalid: ({row}, {col})")

    def get_cell(self, row: int, col: int) -> Cell:
        """A copy of the cell at (row, col)."""
        self._require_position(row, col)
        return self._grid[row][col].copy()

    def get_card_at(self, row: int, col: int) -> Optional[Card]:
        """The card at (row, col), or None if the cell has no card."""
        self._require_position(row, col)
        cell = self._grid[row][col]
        return cell.get_card() if cell.has_card() else None

    def rows(self) -> list[list[Cell]]:
        """A copy of the grid, row by row."""
        return [[cell.copy() for cell in row] for row in self._grid]

    def get_hand(self, side: Optional[Side] = None) -> list[Card]:
        """
        A copy of a side's hand (the side to move by default).

        Raises InvalidStateError before the game starts.
        """
        if self._phase is GamePhase.NOT_STARTED:
            raise InvalidStateError("Game has not started")
        side = side or self._turn
        if side not in PLAYER_SIDES:
            raise InvalidArgumentError(f"No hand for side {side}")
        return list(self._hands[side])

    def remaining_deck_size(self, side: Side) -> int:
        if side not in PLAYER_SIDES:
            raise InvalidArgumentError(f"No deck for side {side}")
        return len(self._decks[side])

    def last_passed(self, side: Side) -> bool:
        """Whether `side`'s most recent action was a pass."""
        return self._last_passed.get(side, False)

    def empty_cell_count(self) -> int:
        return sum(1 for row in self._grid for cell in row if cell.is_empty())

    def is_game_over(self) -> bool:
        """True before the game starts, after the double pass, or once no empty cell remains."""
        return self._phase is not GamePhase.IN_PROGRESS or self.empty_cell_count() == 0

    # =========================================================================
    # Scoring
    # =========================================================================

    def _require_row(self, row: int) -> None:
        if not 0 <= row < self._height:
            raise InvalidArgumentError(f"Invalid row: {row}")

    def row_scores(self, row: int) -> RowScore:
        self._require_row(row)
        return score_row(self._grid[row])

    def row_score(self, row: int) -> int:
        """The larger side's sum for the row, or 0 on a tie."""
        return self.row_scores(row).score

    def first_row_score(self, row: int) -> int:
        return self.row_scores(row).first

    def second_row_score(self, row: int) -> int:
        return self.row_scores(row).second

    def row_winner(self, row: int) -> Side:
        return self.row_scores(row).winner

    def total_score(self, side: Side) -> int:
        return total_score(self._grid, side)

    def winner(self) -> Side:
        return grid_winner(self._grid)

    # =========================================================================
    # Copying
    # =========================================================================

    def copy(self) -> Board:
        """An independent copy of this board. Listeners are not copied."""
        other = Board(self._height, self._width, self._max_hand_size)
        other._grid = self.rows()
        other._hands = {side: list(cards) for side, cards in self._hands.items()}
        other._decks = {side: list(cards) for side, cards in self._decks.items()}
        other._last_passed = dict(self._last_passed)
        other._phase = self._phase
        other._turn = self._turn
        return other

    def __repr__(self) -> str:
        return (
            f"Board(height={self._height}, width={self._width}, "
            f"phase={self._phase.value}, turn={self._turn.value})"
        )
