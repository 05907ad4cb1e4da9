"""
API Service - Conversion between engine objects and schemas.

The service:
1. Snapshots live games into GameSnapshot models
2. Rebuilds games from snapshots
3. Converts replays both ways

Framework-agnostic: callers decide how to transport the JSON.
"""

from __future__ import annotations

from pydantic import ValidationError

from ..config import GameConfig
from ..engine_core.board import Board
from ..engine_core.game import Game, GameState
from ..engine_core.moves import Direction
from ..engine_core.score import Score
from ..errors import SerializationError
from ..session.replay import ReplayData, ReplayMetadata, ReplayMove
from .schemas import (
    BoardSchema,
    DirectionName,
    GameConfigSchema,
    GameSnapshot,
    GameStatsSchema,
    GameStatus,
    ReplayDataSchema,
    ReplayMetadataSchema,
    ReplayMoveSchema,
    ScoreSchema,
)


def _config_from_schema(schema: GameConfigSchema) -> GameConfig:
    return GameConfig(
        board_size=schema.board_size,
        target_score=schema.target_score,
        allow_undo=schema.allow_undo,
        seed=schema.seed,
    )


def _status(state: GameState) -> GameStatus:
    return GameStatus(state.value)


def snapshot_game(game: Game, include_stats: bool = True) -> GameSnapshot:
    """Serializable snapshot of a live game."""
    return GameSnapshot(
        config=GameConfigSchema.model_validate(game.config),
        board=BoardSchema.from_rows(game.board.to_rows()),
        score=ScoreSchema.model_validate(game.score),
        state=_status(game.state),
        moves=game.moves,
        start_time=game.start_time,
        stats=GameStatsSchema.model_validate(game.stats()) if include_stats else None,
    )


def restore_game(snapshot: GameSnapshot | dict | str) -> Game:
    """
    Rebuild a game from a snapshot model, a dict or a JSON string.

    Raises SerializationError on malformed input, including tile values
    that are not powers of two.
    """
    try:
        if isinstance(snapshot, str):
            snapshot = GameSnapshot.model_validate_json(snapshot)
        elif isinstance(snapshot, dict):
            snapshot = GameSnapshot.model_validate(snapshot)
    except ValidationError as e:
        raise SerializationError(str(e)) from e

    return Game.restore(
        config=_config_from_schema(snapshot.config),
        board=Board.from_rows(snapshot.board.to_rows()),
        score=Score(
            current=snapshot.score.current,
            best=snapshot.score.best,
            last_move=snapshot.score.last_move,
        ),
        state=GameState(snapshot.state.value),
        moves=snapshot.moves,
        start_time=snapshot.start_time,
    )


def replay_to_schema(replay: ReplayData) -> ReplayDataSchema:
    return ReplayDataSchema(
        config=GameConfigSchema.model_validate(replay.config),
        initial_board=replay.initial_board,
        moves=[
            ReplayMoveSchema(
                direction=DirectionName(move.direction.value),
                board_before=move.board_before,
                board_after=move.board_after,
                score_before=move.score_before,
                score_after=move.score_after,
                move_number=move.move_number,
                timestamp=move.timestamp,
            )
            for move in replay.moves
        ],
        final_state=_status(replay.final_state),
        final_score=replay.final_score,
        total_moves=replay.total_moves,
        duration=replay.duration,
        metadata=ReplayMetadataSchema.model_validate(replay.metadata),
    )


def replay_from_schema(schema: ReplayDataSchema | dict | str) -> ReplayData:
    """Rebuild an in-memory replay. Raises SerializationError on malformed input."""
    try:
        if isinstance(schema, str):
            schema = ReplayDataSchema.model_validate_json(schema)
        elif isinstance(schema, dict):
            schema = ReplayDataSchema.model_validate(schema)
    except ValidationError as e:
        raise SerializationError(str(e)) from e

    return ReplayData(
        config=_config_from_schema(schema.config),
        initial_board=schema.initial_board,
        moves=[
            ReplayMove(
                direction=Direction(move.direction.value),
                board_before=move.board_before,
                board_after=move.board_after,
                score_before=move.score_before,
                score_after=move.score_after,
                move_number=move.move_number,
                timestamp=move.timestamp,
            )
            for move in schema.moves
        ],
        final_state=GameState(schema.final_state.value),
        final_score=schema.final_score,
        total_moves=schema.total_moves,
        duration=schema.duration,
        metadata=ReplayMetadata(
            name=schema.metadata.name,
            created_at=schema.metadata.created_at,
            player_name=schema.metadata.player_name,
            version=schema.metadata.version,
            notes=schema.metadata.notes,
        ),
    )


def replay_directions(replay: ReplayData | ReplayDataSchema) -> str:
    """Compact direction string such as "LLUR", as accepted by the CLI."""
    if isinstance(replay, ReplayDataSchema):
        replay = replay_from_schema(replay)
    return "".join(direction.value[0].upper() for direction in replay.directions)
