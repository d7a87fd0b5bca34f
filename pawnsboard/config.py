"""
Game configuration.

Settings come from, in increasing priority:
1. Defaults below
2. PAWNSBOARD_* environment variables (GameConfig.from_env)
3. Explicit overrides (CLI flags)

Environment variables:
    PAWNSBOARD_ROWS            Board height (default 3)
    PAWNSBOARD_COLS            Board width, odd and > 1 (default 5)
    PAWNSBOARD_HAND_SIZE       Cards dealt per side (default 5)
    PAWNSBOARD_FIRST_DECK      Deck file for FIRST (standard deck if unset)
    PAWNSBOARD_SECOND_DECK     Deck file for SECOND (standard deck if unset)
    PAWNSBOARD_FIRST_PLAYER    Policy name or "human" (default fillfirst)
    PAWNSBOARD_SECOND_PLAYER   Policy name or "human" (default maxrow)
    PAWNSBOARD_SEED            Shuffle / random policy seed (unset: no shuffle)
    PAWNSBOARD_LOG_LEVEL       Logging level for the CLI (default WARNING)
"""

from __future__ import annotations
import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .bots.registry import HUMAN, POLICIES

ENV_PREFIX = "PAWNSBOARD_"


class GameConfig(BaseModel):
    """Settings for one game."""
    rows: int = Field(default=3, ge=1)
    cols: int = Field(default=5)
    hand_size: int = Field(default=5, ge=1)
    first_deck: Optional[str] = None
    second_deck: Optional[str] = None
    first_player: str = "fillfirst"
    second_player: str = "maxrow"
    seed: Optional[int] = None
    log_level: str = "WARNING"

    @field_validator("cols")
    @classmethod
    def _odd_width(cls, value: int) -> int:
        if value <= 1 or value % 2 == 0:
            raise ValueError("cols must be odd and greater than 1")
        return value

    @field_validator("first_player", "second_player")
    @classmethod
    def _known_player(cls, value: str) -> str:
        name = value.lower()
        if name != HUMAN and name not in POLICIES:
            raise ValueError(
                f"unknown player {value!r}; choose from: {', '.join(sorted([HUMAN, *POLICIES]))}"
            )
        return name

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _decks_come_in_pairs(self) -> GameConfig:
        if (self.first_deck is None) != (self.second_deck is None):
            raise ValueError("first_deck and second_deck must be given together")
        return self

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> GameConfig:
        """
        Build a config from PAWNSBOARD_* variables.

        Keyword overrides win over the environment; None overrides are
        ignored so unset CLI flags fall through.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
