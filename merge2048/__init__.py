"""
merge2048 - 2048 rules engine with computer players

A deterministic, seedable implementation of the sliding-tile game:
- Board, scoring and move execution
- Single-level undo
- Greedy, expectimax and MCTS move selection
- Replays and JSON snapshots
"""

__version__ = "0.1.0"

from .config import GameConfig
from .errors import GameError
from .engine_core import Board, Direction, Game, GameState, Score, Tile
from .bots import AIAlgorithm, AIPlayer
from .session import AIGameController

__all__ = [
    "GameConfig",
    "GameError",
    "Board",
    "Direction",
    "Game",
    "GameState",
    "Score",
    "Tile",
    "AIAlgorithm",
    "AIPlayer",
    "AIGameController",
]
