"""
Game - Orchestrates board, score and random source under a config.

The game is the single point of state mutation for play:
- make_move() collapses the board, spawns a tile and re-evaluates the state
- undo() restores the one saved snapshot
- new_game() resets in place, keeping the best score

Design principles:
- Fallible operations raise GameError subclasses, nothing is swallowed
- Cloning is cheap and complete (board, score, RNG state), so AI search
  can explore hypothetical futures without touching the live game
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time

from ..config import GameConfig
from ..errors import GameOverError, NoUndoAvailableError, SerializationError
from .board import Board, Tile
from .moves import Direction, collapse_board
from .rng import GameRng
from .score import Score

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Lifecycle of a game."""
    PLAYING = "playing"
    WON = "won"
    GAME_OVER = "game_over"


@dataclass
class GameStats:
    """Summary of a game for display and statistics collaborators."""
    score: int
    best_score: int
    moves: int
    duration: int  # Seconds since the game started
    won: bool
    game_over: bool


def current_time() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


class Game:
    """
    A single 2048 game.

    Usage:
        game = Game(GameConfig(seed=42))
        if game.make_move(Direction.LEFT):
            print(game.score.current)
        game.undo()
    """

    def __init__(self, config: GameConfig | None = None):
        self._config = config or GameConfig()
        self._board = Board(self._config.board_size)
        self._score = Score()
        self._rng = GameRng(self._config.seed)
        self._state = GameState.PLAYING
        self._moves = 0
        self._start_time = current_time()
        self._previous: tuple[Board, Score, int] | None = None

        self._add_random_tile()
        self._add_random_tile()
        logger.debug(
            "New %dx%d game (seed=%s, target=%d)",
            self._config.board_size,
            self._config.board_size,
            self._config.seed,
            self._config.target_score,
        )

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._board

    @property
    def score(self) -> Score:
        return self._score

    @property
    def rng(self) -> GameRng:
        return self._rng

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def start_time(self) -> int:
        return self._start_time

    @property
    def can_undo(self) -> bool:
        return self._config.allow_undo and self._previous is not None

    def stats(self) -> GameStats:
        return GameStats(
            score=self._score.current,
            best_score=self._score.best,
            moves=self._moves,
            duration=max(current_time() - self._start_time, 0),
            won=self._state == GameState.WON,
            game_over=self._state == GameState.GAME_OVER,
        )

    def make_move(self, direction: Direction) -> bool:
        """
        Collapse the board toward direction.

        Returns True if any tile moved (a new tile is then spawned),
        False if the move changed nothing.

        Raises GameOverError if the game is not being played.
        """
        if self._state != GameState.PLAYING:
            raise GameOverError()

        if self._config.allow_undo:
            self._previous = (self._board.clone(), self._score.clone(), self._moves)

        self._score.clear_last_move()
        moved = collapse_board(self._board, direction, self._score)
        if not moved:
            return False

        self._moves += 1
        self._add_random_tile()
        self._update_state()
        return True

    def undo(self):
        """
        Restore the board, score and move count saved by the last move
        attempt (a no-op attempt saves too, so undo is then a no-op).

        Only one level of history is kept: a second undo without an
        intervening move raises NoUndoAvailableError.
        """
        if not self._config.allow_undo or self._previous is None:
            raise NoUndoAvailableError()

        self._board, self._score, self._moves = self._previous
        self._previous = None
        self._state = GameState.PLAYING
        logger.debug("Undo to move %d", self._moves)

    def new_game(self):
        """Reset board, current score, moves and timer in place."""
        self._board = Board(self._config.board_size)
        self._score.reset_current()
        self._state = GameState.PLAYING
        self._moves = 0
        self._start_time = current_time()
        self._previous = None

        self._add_random_tile()
        self._add_random_tile()

    def clone(self) -> Game:
        """Independent copy including RNG state and undo snapshot."""
        game = Game.__new__(Game)
        game._config = self._config
        game._board = self._board.clone()
        game._score = self._score.clone()
        game._rng = self._rng.clone()
        game._state = self._state
        game._moves = self._moves
        game._start_time = self._start_time
        game._previous = (
            (self._previous[0].clone(), self._previous[1].clone(), self._previous[2])
            if self._previous is not None
            else None
        )
        return game

    @classmethod
    def restore(
        cls,
        config: GameConfig,
        board: Board,
        score: Score,
        state: GameState = GameState.PLAYING,
        moves: int = 0,
        start_time: int | None = None,
    ) -> Game:
        """
        Rebuild a game from persisted parts.

        The undo slot starts empty and the RNG is re-seeded from config.
        """
        if board.size != config.board_size:
            raise SerializationError(
                f"board size {board.size} does not match config size {config.board_size}"
            )

        game = cls.__new__(cls)
        game._config = config
        game._board = board.clone()
        game._score = score.clone()
        game._rng = GameRng(config.seed)
        game._state = state
        game._moves = moves
        game._start_time = current_time() if start_time is None else start_time
        game._previous = None
        return game

    def _add_random_tile(self):
        """Spawn a 2 or 4 in a uniformly chosen empty cell (no-op if full)."""
        empty = self._board.empty_positions()
        if not empty:
            return
        row, col = empty[self._rng.gen_range(len(empty))]
        self._board.set_tile(row, col, Tile(self._rng.gen_tile_value()))

    def _update_state(self):
        if self._state == GameState.PLAYING and self._board.max_tile() >= self._config.target_score:
            self._state = GameState.WON
            logger.debug("Game won after %d moves (score %d)", self._moves, self._score.current)
        elif not self._board.has_valid_moves():
            self._state = GameState.GAME_OVER
            logger.debug("Game over after %d moves (score %d)", self._moves, self._score.current)
