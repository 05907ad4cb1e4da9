"""
Replay - Record games move by move and play them back.

A replay stores the config (always with a concrete seed) and the list of
moves that changed the board. Because tile spawns come from the seeded
GameRng and no-op moves consume no randomness, re-applying the recorded
directions to a fresh Game rebuilds every intermediate board exactly.

Replays are in-memory only; see api.schemas for a serializable form.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
import random

from .. import __version__
from ..config import GameConfig
from ..engine_core.game import Game, GameState, current_time
from ..engine_core.moves import Direction
from ..errors import InvalidOperationError

logger = logging.getLogger(__name__)

MIN_SPEED = 0.1
MAX_SPEED = 10.0


@dataclass
class ReplayMove:
    """One recorded move with the board and score on either side of it."""
    direction: Direction
    board_before: list[list[int]]
    board_after: list[list[int]]
    score_before: int
    score_after: int
    move_number: int  # Moves made before this one
    timestamp: int


@dataclass
class ReplayMetadata:
    name: str = "Untitled Replay"
    created_at: int = field(default_factory=current_time)
    player_name: str | None = None
    version: str = __version__
    notes: str | None = None

    def with_player_name(self, player_name: str) -> ReplayMetadata:
        return replace(self, player_name=player_name)

    def with_notes(self, notes: str) -> ReplayMetadata:
        return replace(self, notes=notes)


@dataclass
class ReplayData:
    """
    A complete recording.

    Contains:
    - The config the game was played with (seed always set)
    - The initial board and every move that changed the board
    - Final state, score and move count
    """
    config: GameConfig
    initial_board: list[list[int]]
    moves: list[ReplayMove] = field(default_factory=list)
    final_state: GameState = GameState.PLAYING
    final_score: int = 0
    total_moves: int = 0
    duration: int = 0  # Seconds
    metadata: ReplayMetadata = field(default_factory=ReplayMetadata)

    @property
    def directions(self) -> list[Direction]:
        return [move.direction for move in self.moves]


class ReplayRecorder:
    """
    Plays a game while recording it.

    Usage:
        recorder = ReplayRecorder(GameConfig())
        recorder.make_move(Direction.LEFT)
        replay = recorder.stop_recording()
    """

    def __init__(self, config: GameConfig):
        if config.seed is None:
            config = config.with_seed(random.getrandbits(63))
        self._game = Game(config)
        self._recording = True
        self._started_at = current_time()
        self._replay = ReplayData(
            config=config,
            initial_board=self._game.board.to_rows(),
            final_state=self._game.state,
            final_score=self._game.score.current,
        )

    @property
    def game(self) -> Game:
        return self._game

    @property
    def replay_data(self) -> ReplayData:
        return self._replay

    @property
    def is_recording(self) -> bool:
        return self._recording

    def set_metadata(self, metadata: ReplayMetadata):
        self._replay.metadata = metadata

    def make_move(self, direction: Direction) -> bool:
        """
        Apply direction to the recorded game.

        Only moves that change the board are stored.
        Raises InvalidOperationError once recording has stopped.
        """
        if not self._recording:
            raise InvalidOperationError("Recording stopped")

        board_before = self._game.board.to_rows()
        score_before = self._game.score.current
        move_number = self._game.moves
        timestamp = current_time()

        moved = self._game.make_move(direction)
        if moved:
            self._replay.moves.append(ReplayMove(
                direction=direction,
                board_before=board_before,
                board_after=self._game.board.to_rows(),
                score_before=score_before,
                score_after=self._game.score.current,
                move_number=move_number,
                timestamp=timestamp,
            ))
            self._replay.total_moves = self._game.moves
            self._replay.final_state = self._game.state
            self._replay.final_score = self._game.score.current
        return moved

    def stop_recording(self) -> ReplayData:
        self._recording = False
        self._replay.duration = max(current_time() - self._started_at, 0)
        logger.debug(
            "Recorded %d moves (seed=%s, final score %d)",
            len(self._replay.moves),
            self._replay.config.seed,
            self._replay.final_score,
        )
        return self._replay


class ReplayPlayer:
    """
    Steps through a recording.

    The current game is rebuilt from the config and the first N recorded
    directions, so any position can be reached in either direction.
    """

    def __init__(self, replay: ReplayData):
        self._replay = replay
        self._current_move = 0
        self._game = Game(replay.config)
        self._playing = False
        self._speed = 1.0

    @property
    def replay_data(self) -> ReplayData:
        return self._replay

    @property
    def current_game(self) -> Game:
        return self._game

    @property
    def current_move_index(self) -> int:
        return self._current_move

    @property
    def total_moves(self) -> int:
        return len(self._replay.moves)

    @property
    def is_finished(self) -> bool:
        return self._current_move >= self.total_moves

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, speed: float):
        self._speed = min(max(speed, MIN_SPEED), MAX_SPEED)

    @property
    def progress(self) -> float:
        """Percentage of recorded moves applied (0 for an empty replay)."""
        if not self._replay.moves:
            return 0.0
        return self._current_move / len(self._replay.moves) * 100.0

    def play(self):
        self._playing = True

    def pause(self):
        self._playing = False

    def stop(self):
        """Pause and rewind to the initial board."""
        self._playing = False
        self._current_move = 0
        self._game = Game(self._replay.config)

    def next_move(self) -> bool:
        if self.is_finished:
            return False
        self._game.make_move(self._replay.moves[self._current_move].direction)
        self._current_move += 1
        return True

    def previous_move(self) -> bool:
        if self._current_move == 0:
            return False
        self._reset_to_move(self._current_move - 1)
        return True

    def go_to_move(self, index: int) -> bool:
        """Jump to the position after index moves (0..total_moves inclusive)."""
        if index < 0 or index > self.total_moves:
            raise InvalidOperationError("Move index out of bounds")
        self._reset_to_move(index)
        return True

    def _reset_to_move(self, index: int):
        self._game = Game(self._replay.config)
        for move in self._replay.moves[:index]:
            self._game.make_move(move.direction)
        self._current_move = index


class ReplayManager:
    """
    Holds replays in memory.

    No persistence - replays live as long as the manager.
    """

    def __init__(self):
        self._replays: list[ReplayData] = []

    def add_replay(self, replay: ReplayData):
        self._replays.append(replay)

    def get_replays(self) -> list[ReplayData]:
        return list(self._replays)

    def get_replay(self, index: int) -> ReplayData | None:
        if 0 <= index < len(self._replays):
            return self._replays[index]
        return None

    def remove_replay(self, index: int) -> ReplayData | None:
        if 0 <= index < len(self._replays):
            return self._replays.pop(index)
        return None

    def clear_replays(self):
        self._replays.clear()

    @property
    def replay_count(self) -> int:
        return len(self._replays)
