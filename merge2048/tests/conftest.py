"""
Pytest fixtures for merge2048 tests.
"""

import pytest

from ..config import GameConfig
from ..engine_core import Board, Game, Score


# A full board with no equal neighbours
BLOCKED_ROWS = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


@pytest.fixture
def config() -> GameConfig:
    """Seeded default config."""
    return GameConfig(seed=42)


@pytest.fixture
def game(config: GameConfig) -> Game:
    """Fresh seeded game with its two starting tiles."""
    return Game(config)


@pytest.fixture
def make_game():
    """
    Factory for games with a prepared board.

    Usage:
        game = make_game([[2, 2], [0, 0]], target_score=8)
    """
    def _make(rows, seed=7, **config_kwargs):
        config = GameConfig(board_size=len(rows), seed=seed, **config_kwargs)
        return Game.restore(config, Board.from_rows(rows), Score())

    return _make


@pytest.fixture
def blocked_game(make_game) -> Game:
    """Playing-state game where no direction changes the board."""
    return make_game(BLOCKED_ROWS)
