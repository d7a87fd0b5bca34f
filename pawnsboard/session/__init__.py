"""
Session Module - Manages in-memory game sessions.

A session represents one game:
- Created with a started board and a player per side
- Serializes every board access through its own lock
- Runs bot turns through the game loop
- Dropped when the game ends
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
