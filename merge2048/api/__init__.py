"""
API Module - Serializable interface to the engine.

Converts games and replays to pydantic models and back, so callers can
store or transmit them as JSON. No transport is bundled.
"""

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
    TileSchema,
)
from .service import (
    replay_directions,
    replay_from_schema,
    replay_to_schema,
    restore_game,
    snapshot_game,
)

__all__ = [
    "BoardSchema",
    "DirectionName",
    "GameConfigSchema",
    "GameSnapshot",
    "GameStatsSchema",
    "GameStatus",
    "ReplayDataSchema",
    "ReplayMetadataSchema",
    "ReplayMoveSchema",
    "ScoreSchema",
    "TileSchema",
    "replay_directions",
    "replay_from_schema",
    "replay_to_schema",
    "restore_game",
    "snapshot_game",
]
