"""
Policy registry.

Maps the names used on the command line and in configuration to policy
factories.
"""

from __future__ import annotations
from typing import Callable, Optional

from .policy import BotPolicy, RandomPolicy
from .strategies import FillFirstPolicy, MaxRowScorePolicy

HUMAN = "human"

POLICIES: dict[str, Callable[[Optional[int]], BotPolicy]] = {
    "random": lambda seed: RandomPolicy(seed=seed),
    "fillfirst": lambda seed: FillFirstPolicy(),
    "maxrow": lambda seed: MaxRowScorePolicy(),
}


def create_policy(name: str, seed: Optional[int] = None) -> BotPolicy:
    """Create a policy by registry name."""
    factory = POLICIES.get(name.lower())
    if factory is None:
        raise ValueError(
            f"Unknown policy {name!r}; choose from: {', '.join(sorted(POLICIES))}"
        )
    return factory(seed)


def create_player(name: str, seed: Optional[int] = None) -> Optional[BotPolicy]:
    """Like create_policy(), but 'human' gives None (a side moved by a person)."""
    if name.lower() == HUMAN:
        return None
    return create_policy(name, seed)
