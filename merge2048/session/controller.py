"""
AI Game Controller - Binds one AIPlayer to one live game.

The controller:
1. Asks the AI for a direction
2. Applies it to the game through make_move
3. Optionally paces itself for drivers that call tick() once per frame

Headless drivers (CLI, tests) use play() instead of tick().
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time

from ..bots import AIAlgorithm, AIPlayer
from ..config import GameConfig
from ..engine_core.game import Game, GameState
from ..engine_core.moves import Direction

logger = logging.getLogger(__name__)

DEFAULT_MOVE_DELAY_MS = 500


def now_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class AutoPlayResult:
    """
    Result of a headless play() run.

    stopped_by is one of "terminal", "no_move" or "max_moves".
    """
    moves_made: int
    final_state: GameState
    final_score: int
    stopped_by: str
    directions: list[Direction] = field(default_factory=list)


class AIGameController:
    """
    Drives a game with an AI player.

    Usage:
        controller = AIGameController(GameConfig(seed=7), AIAlgorithm.GREEDY)
        while controller.make_ai_move():
            pass
        print(controller.game.stats())
    """

    def __init__(self, config: GameConfig, algorithm: AIAlgorithm):
        self.ai_player = AIPlayer(algorithm)
        self._game = Game(config)
        self.auto_play = False
        self.move_delay_ms = DEFAULT_MOVE_DELAY_MS
        self._last_move_at: float | None = None

    @property
    def game(self) -> Game:
        return self._game

    @game.setter
    def game(self, game: Game):
        self._game = game
        self._last_move_at = None

    @property
    def algorithm(self) -> AIAlgorithm:
        return self.ai_player.algorithm

    def make_ai_move(self) -> bool:
        """
        Let the AI play one move.

        Returns False without consulting the AI when the game is not being
        played; otherwise returns whether the chosen move changed the board.
        """
        if self._game.state != GameState.PLAYING:
            return False

        direction = self.ai_player.get_best_move(self._game)
        moved = self._game.make_move(direction)
        logger.debug(
            "AI (%s) played %s: moved=%s score=%d",
            self.algorithm.value,
            direction.value,
            moved,
            self._game.score.current,
        )
        return moved

    def new_game(self):
        self._game.new_game()
        self._last_move_at = None

    def tick(self, now: float | None = None) -> bool:
        """
        Make an AI move if auto-play is on and move_delay_ms has elapsed.

        now is in milliseconds on any monotonic clock; defaults to time.monotonic().
        """
        if not self.auto_play:
            return False

        now = now_ms() if now is None else now
        if self._last_move_at is not None and now - self._last_move_at < self.move_delay_ms:
            return False

        self._last_move_at = now
        return self.make_ai_move()

    def play(self, max_moves: int = 10_000) -> AutoPlayResult:
        """Play until the game ends, the AI's move changes nothing, or max_moves."""
        directions: list[Direction] = []
        stopped_by = "max_moves"

        while len(directions) < max_moves:
            if self._game.state != GameState.PLAYING:
                stopped_by = "terminal"
                break
            direction = self.ai_player.get_best_move(self._game)
            if not self._game.make_move(direction):
                stopped_by = "no_move"
                break
            directions.append(direction)

        logger.info(
            "Auto-play stopped (%s) after %d moves, score %d",
            stopped_by,
            len(directions),
            self._game.score.current,
        )
        return AutoPlayResult(
            moves_made=len(directions),
            final_state=self._game.state,
            final_score=self._game.score.current,
            stopped_by=stopped_by,
            directions=directions,
        )
