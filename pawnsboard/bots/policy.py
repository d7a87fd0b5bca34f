"""
Bot Policy - How automated sides choose moves.

A policy is handed the board and the legal actions for the side to move
(placements in row-major order, PASS last) and picks one. It never mutates
the board; the choice goes through the reducer like any human move.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.board import Board


@dataclass
class BotDecision:
    """
    A chosen move plus why it was chosen.

    `considered` counts the placements the policy looked at; `details`
    holds whatever numbers the policy based the choice on.
    """
    action: Action
    reason: str = ""
    considered: int = 0
    details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """Base class for move-picking policies."""

    @abstractmethod
    def select_action(self, board: Board, legal_actions: list[Action]) -> BotDecision:
        """
        Pick one of `legal_actions` for the side to move on `board`.

        The board must be treated as read only.
        """

    def get_name(self) -> str:
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Plays a uniformly random placement; passes only when no card fits.

    Seeded policies are reproducible, which keeps bot-vs-bot games
    repeatable.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, board: Board, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError(f"{self.get_name()} was given no legal actions")

        placements = [a for a in legal_actions if not a.is_pass]
        if not placements:
            return BotDecision(action=legal_actions[-1], reason="No card fits anywhere")

        return BotDecision(
            action=self.rng.choice(placements),
            reason="Random placement",
            considered=len(placements),
        )
