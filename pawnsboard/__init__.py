"""
Pawnsboard - Influence Board Game Engine

A deterministic rules engine for a two-player card-and-board game.
Players place cards onto cells they hold with pawns; each card projects an
influence pattern that adds or captures pawns around it, and rows are scored
by the sum of placed card values.

The package provides:
- The board rules engine (placement, influence, turns, scoring)
- A deck loader for plain-text deck files and a standard card set
- Simple bot policies
- In-memory game sessions and a terminal CLI
"""

__version__ = "0.1.0"
