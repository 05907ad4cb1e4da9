"""
Engine Core - Board state transitions and scoring.

The engine:
1. Holds the Board of Tiles
2. Collapses lines for a Direction (compact, merge, re-compact)
3. Awards merge points to the Score
4. Spawns tiles from the seeded GameRng
5. Detects win and game-over states
"""

from .board import Board, Tile
from .score import Score
from .rng import GameRng
from .moves import Direction, ALL_DIRECTIONS, collapse_board, collapse_line, line_positions
from .game import Game, GameState, GameStats

__all__ = [
    "Board",
    "Tile",
    "Score",
    "GameRng",
    "Direction",
    "ALL_DIRECTIONS",
    "collapse_board",
    "collapse_line",
    "line_positions",
    "Game",
    "GameState",
    "GameStats",
]
