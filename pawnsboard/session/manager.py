"""
Session Manager - In-memory registry of running games.

A session is one game in progress:
- One Board and the Reducer that applies actions to it
- A bot policy per side, or None for a side moved by a person
- One re-entrant lock; every read and write of the board goes through it

Sessions live in memory only. Ending a session drops it and its board.
"""

from __future__ import annotations
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..bots.policy import BotPolicy
from ..bots.registry import create_player
from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.board import Board
from ..engine_core.events import BoardEvent
from ..engine_core.reducer import Reducer
from ..engine_core.state import Side
from ..games.queens.deck_loader import DeckPair, load_decks
from ..games.queens.setup import create_board
from ..schemas import BoardSnapshot, snapshot_board

if TYPE_CHECKING:
    from ..config import GameConfig

logger = logging.getLogger(__name__)

PlayerSpec = Union[str, BotPolicy, None]


class SessionState(Enum):
    """Lifecycle of a session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    One game in progress.

    Mutations go through submit(), which holds the session lock while the
    reducer runs. Board events are appended to `events` as they happen.
    """
    session_id: str
    board: Board
    created_at: float
    players: dict[Side, Optional[BotPolicy]] = field(default_factory=dict)
    state: SessionState = SessionState.ACTIVE
    events: list[BoardEvent] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    reducer: Reducer = field(init=False, repr=False)

    def __post_init__(self):
        self.reducer = Reducer(board=self.board)
        self.board.add_listener(self.events.append)
        if self.board.is_game_over():
            self.state = SessionState.GAME_OVER

    @property
    def history(self) -> list[Action]:
        return self.reducer.history

    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def bot_for(self, side: Side) -> Optional[BotPolicy]:
        return self.players.get(side)

    def is_bot_turn(self) -> bool:
        with self.lock:
            return not self.board.is_game_over() and self.bot_for(self.board.turn) is not None

    def submit(self, action: Action) -> ActionResult:
        """Apply an action under the session lock."""
        with self.lock:
            if not self.is_active():
                return ActionResult.failure(
                    f"Session {self.session_id} is {self.state.value}",
                    error_code="SESSION_CLOSED",
                )
            result = self.reducer.apply(action)
            if result.success and self.board.is_game_over():
                self.state = SessionState.GAME_OVER
                logger.info(
                    "Session %s finished: FIRST %d, SECOND %d",
                    self.session_id,
                    self.board.total_score(Side.FIRST),
                    self.board.total_score(Side.SECOND),
                )
            return result

    def legal_actions(self) -> list[Action]:
        with self.lock:
            return legal_actions(self.board)

    def snapshot(self) -> BoardSnapshot:
        with self.lock:
            return snapshot_board(self.board)


class SessionManager:
    """
    Owns every running Session, keyed by id.

    Responsibilities:
    - Create sessions with their boards and bots
    - Look sessions up and list the active ones
    - Clean up finished sessions

    Nothing is persisted; a restart loses every game.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        rows: int = 3,
        cols: int = 5,
        hand_size: int = 5,
        first_player: PlayerSpec = "fillfirst",
        second_player: PlayerSpec = "maxrow",
        decks: Optional[DeckPair] = None,
        seed: Optional[int] = None,
    ) -> Session:
        """
        Create a new game session with a started board.

        Args:
            rows, cols, hand_size: Board shape and opening hand size
            first_player, second_player: Policy name, BotPolicy instance,
                "human" or None (both of which mean a person moves that side)
            decks: Decks to play with (standard decks if omitted)
            seed: Shuffle seed, also used to seed random policies

        Returns:
            New active Session with FIRST to move
        """
        board = create_board(
            rows=rows,
            cols=cols,
            hand_size=hand_size,
            first_deck=decks.first if decks else None,
            second_deck=decks.second if decks else None,
            max_hand_size=decks.max_hand_size if decks else None,
            shuffle_seed=seed,
        )

        session = Session(
            session_id=str(uuid.uuid4()),
            board=board,
            created_at=time.time(),
            players={
                Side.FIRST: self._resolve_player(first_player, seed),
                Side.SECOND: self._resolve_player(second_player, seed),
            },
        )

        with self._lock:
            self._sessions[session.session_id] = session
        logger.debug("Created session %s (%dx%d)", session.session_id, rows, cols)
        return session

    def create_session_from_config(self, config: GameConfig) -> Session:
        """Create a session from a GameConfig, loading deck files if it names any."""
        decks = None
        if config.first_deck and config.second_deck:
            decks = load_decks(config.first_deck, config.second_deck)
        return self.create_session(
            rows=config.rows,
            cols=config.cols,
            hand_size=config.hand_size,
            first_player=config.first_player,
            second_player=config.second_player,
            decks=decks,
            seed=config.seed,
        )

    @staticmethod
    def _resolve_player(player: PlayerSpec, seed: Optional[int]) -> Optional[BotPolicy]:
        if player is None or isinstance(player, BotPolicy):
            return player
        return create_player(player, seed)

    def get_session(self, session_id: str) -> Optional[Session]:
        """Look up a session; None if unknown or already ended."""
        with self._lock:
            return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it.

        Returns False if no such session exists.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        with session.lock:
            if reason == "completed" and session.board.is_game_over():
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
        logger.debug("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """IDs of sessions whose game is still running."""
        with self._lock:
            return [
                sid for sid, session in self._sessions.items()
                if session.is_active()
            ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        with self._lock:
            to_remove = [
                session_id for session_id, session in self._sessions.items()
                if current_time - session.created_at > max_age_seconds
                and not session.is_active()
            ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
