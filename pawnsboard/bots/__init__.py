"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy: Uniform random baseline
- FillFirstPolicy / MaxRowScorePolicy: Greedy heuristics
- create_policy: Build a policy by name
"""

from .policy import BotPolicy, BotDecision, RandomPolicy
from .strategies import FillFirstPolicy, MaxRowScorePolicy
from .registry import POLICIES, HUMAN, create_policy, create_player

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FillFirstPolicy",
    "MaxRowScorePolicy",
    "POLICIES",
    "HUMAN",
    "create_policy",
    "create_player",
]
