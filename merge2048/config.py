"""
Game Configuration - Settings fixed for the lifetime of a game.

A GameConfig is immutable once a Game is constructed. To change any
setting, build a new config and start a new Game with it.

Environment overrides (read by GameConfig.from_env):
    MERGE2048_BOARD_SIZE     Board width/height (default 4)
    MERGE2048_TARGET_SCORE   Tile value that wins the game (default 2048)
    MERGE2048_ALLOW_UNDO     "1/true/yes/on" enables undo (default on)
    MERGE2048_SEED           Integer seed for reproducible games
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import os

DEFAULT_BOARD_SIZE = 4
DEFAULT_TARGET_SCORE = 2048

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a single game.

    Note: target_score is compared against the largest tile on the board,
    not against the accumulated score.
    """
    board_size: int = DEFAULT_BOARD_SIZE
    target_score: int = DEFAULT_TARGET_SCORE
    allow_undo: bool = True
    seed: int | None = None

    def with_seed(self, seed: int | None) -> GameConfig:
        """Return a copy of this config with a different seed."""
        return replace(self, seed=seed)

    @classmethod
    def from_env(cls, prefix: str = "MERGE2048_") -> GameConfig:
        """Build a config from environment variables, falling back to defaults."""
        seed = os.getenv(f"{prefix}SEED")
        allow_undo = os.getenv(f"{prefix}ALLOW_UNDO")
        return cls(
            board_size=int(os.getenv(f"{prefix}BOARD_SIZE", DEFAULT_BOARD_SIZE)),
            target_score=int(os.getenv(f"{prefix}TARGET_SCORE", DEFAULT_TARGET_SCORE)),
            allow_undo=True if allow_undo is None else allow_undo.lower() in _TRUTHY,
            seed=int(seed) if seed else None,
        )
