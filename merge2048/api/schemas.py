"""
Pydantic Schemas - Serializable forms of games, stats and replays.

These models are the persistence/interchange contract for the engine.
Conversion to and from the core types lives in api.service.

Boards are stored as square grids of {"value": n} tiles (0 = empty).
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Enums
# =============================================================================

class DirectionName(str, Enum):
    """Move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class GameStatus(str, Enum):
    """Game lifecycle values."""
    PLAYING = "playing"
    WON = "won"
    GAME_OVER = "game_over"


# =============================================================================
# Core Models
# =============================================================================

class TileSchema(BaseModel):
    """
    A single cell (0 = empty, otherwise a power of two >= 2).

    A bare integer is accepted in place of {"value": n}.
    """
    value: int = Field(0, ge=0)

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def accept_bare_value(cls, data):
        if isinstance(data, int) and not isinstance(data, bool):
            return {"value": data}
        return data

    @field_validator("value")
    @classmethod
    def check_power_of_two(cls, value: int) -> int:
        if value != 0 and (value < 2 or value & (value - 1) != 0):
            raise ValueError(f"tile value {value} is not a power of two")
        return value


class BoardSchema(BaseModel):
    """Square grid of tiles, row-major."""
    size: int = Field(gt=0)
    tiles: list[list[TileSchema]]

    @model_validator(mode="after")
    def check_square(self):
        if len(self.tiles) != self.size or any(len(row) != self.size for row in self.tiles):
            raise ValueError(f"tiles must be a {self.size}x{self.size} grid")
        return self

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> "BoardSchema":
        return cls(
            size=len(rows),
            tiles=[[TileSchema(value=value) for value in row] for row in rows],
        )

    def to_rows(self) -> list[list[int]]:
        return [[tile.value for tile in row] for row in self.tiles]


class ScoreSchema(BaseModel):
    current: int = Field(0, ge=0)
    best: int = Field(0, ge=0)
    last_move: int = Field(0, ge=0)

    model_config = {"from_attributes": True}


class GameConfigSchema(BaseModel):
    """Game setup parameters."""
    board_size: int = Field(4, gt=0)
    target_score: int = Field(2048, gt=0)
    allow_undo: bool = True
    seed: Optional[int] = None

    model_config = {"from_attributes": True}


class GameStatsSchema(BaseModel):
    score: int = 0
    best_score: int = 0
    moves: int = 0
    duration: int = Field(0, description="Seconds since the game started")
    won: bool = False
    game_over: bool = False

    model_config = {"from_attributes": True}


class GameSnapshot(BaseModel):
    """
    Everything needed to rebuild a game.

    The undo slot and RNG position are not stored; a restored game
    re-seeds from config.seed.
    """
    config: GameConfigSchema
    board: BoardSchema
    score: ScoreSchema
    state: GameStatus = GameStatus.PLAYING
    moves: int = Field(0, ge=0)
    start_time: int = 0
    stats: Optional[GameStatsSchema] = None


# =============================================================================
# Replay Models
# =============================================================================

class ReplayMoveSchema(BaseModel):
    direction: DirectionName
    board_before: list[list[int]]
    board_after: list[list[int]]
    score_before: int = 0
    score_after: int = 0
    move_number: int = 0
    timestamp: int = 0

    model_config = {"from_attributes": True}


class ReplayMetadataSchema(BaseModel):
    name: str = "Untitled Replay"
    created_at: int = 0
    player_name: Optional[str] = None
    version: str = ""
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class ReplayDataSchema(BaseModel):
    """A recorded game: config, initial board and every board-changing move."""
    config: GameConfigSchema
    initial_board: list[list[int]]
    moves: list[ReplayMoveSchema] = Field(default_factory=list)
    final_state: GameStatus = GameStatus.PLAYING
    final_score: int = 0
    total_moves: int = 0
    duration: int = 0
    metadata: ReplayMetadataSchema = Field(default_factory=ReplayMetadataSchema)
