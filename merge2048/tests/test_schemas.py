"""
Tests for pydantic schemas and the conversion service.

Validates that:
- Snapshots restore to an equivalent game
- Malformed input raises SerializationError
- Replays survive a JSON round trip
"""

import json

import pytest
from pydantic import ValidationError

from ..api import (
    BoardSchema,
    GameConfigSchema,
    GameSnapshot,
    ScoreSchema,
    TileSchema,
    replay_directions,
    replay_from_schema,
    replay_to_schema,
    restore_game,
    snapshot_game,
)
from ..config import GameConfig
from ..engine_core import Direction, GameState, Tile
from ..errors import SerializationError
from ..session import ReplayPlayer, ReplayRecorder


class TestSnapshots:
    """Tests for game snapshots."""

    def test_snapshot_fields(self, game):
        game.make_move(Direction.LEFT) or game.make_move(Direction.RIGHT)
        data = snapshot_game(game).model_dump()
        assert data["config"]["seed"] == 42
        assert data["board"]["size"] == 4
        assert data["board"]["tiles"] == [
            [{"value": value} for value in row] for row in game.board.to_rows()
        ]
        assert data["state"] == "playing"
        assert data["moves"] == 1
        assert data["stats"]["moves"] == 1

    def test_json_round_trip(self, make_game):
        game = make_game([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        game.make_move(Direction.LEFT)
        restored = restore_game(snapshot_game(game).model_dump_json())
        assert restored.board == game.board
        assert restored.score == game.score
        assert restored.state == game.state
        assert restored.moves == game.moves
        assert restored.config == game.config
        assert not restored.can_undo

    def test_restore_from_dict(self, make_game):
        game = make_game([[4, 4, 0, 0], [0] * 4, [0] * 4, [0] * 4], target_score=8)
        game.make_move(Direction.LEFT)
        restored = restore_game(snapshot_game(game).model_dump(mode="json"))
        assert restored.state == GameState.WON

    def test_snapshot_without_stats(self, game):
        assert snapshot_game(game, include_stats=False).stats is None

    def test_malformed_json(self):
        with pytest.raises(SerializationError):
            restore_game("{not json")

    def test_size_mismatch(self):
        snapshot = GameSnapshot(
            config=GameConfigSchema(board_size=4),
            board=BoardSchema(size=2, tiles=[[2, 0], [0, 2]]),
            score=ScoreSchema(),
        )
        with pytest.raises(SerializationError):
            restore_game(snapshot)


class TestSchemaValidation:
    """Tests for schema constraints."""

    def test_board_must_be_square(self):
        with pytest.raises(ValidationError):
            BoardSchema(size=2, tiles=[[2, 0]])

    def test_board_rejects_negative_values(self):
        with pytest.raises(ValidationError):
            BoardSchema(size=1, tiles=[[-2]])

    @pytest.mark.parametrize("value", [1, 3, 6, 12])
    def test_tile_rejects_non_power_of_two(self, value):
        with pytest.raises(ValidationError):
            TileSchema(value=value)

    def test_tile_round_trip(self):
        tile = TileSchema.model_validate_json(TileSchema(value=64).model_dump_json())
        assert tile.value == 64
        assert TileSchema.model_validate(Tile(8)).value == 8
        assert TileSchema.model_validate(16).value == 16
        assert TileSchema().value == 0

    def test_board_round_trip(self):
        board = BoardSchema.from_rows([[2, 0], [0, 1024]])
        restored = BoardSchema.model_validate_json(board.model_dump_json())
        assert restored.tiles[1][1] == TileSchema(value=1024)
        assert restored.to_rows() == [[2, 0], [0, 1024]]

    def test_restore_rejects_non_power_of_two_tiles(self):
        data = {
            "config": {"board_size": 2, "seed": 1},
            "board": {"size": 2, "tiles": [[3, 3], [0, 0]]},
            "score": {},
        }
        with pytest.raises(SerializationError):
            restore_game(data)

    def test_config_from_attributes(self):
        schema = GameConfigSchema.model_validate(GameConfig(board_size=5, seed=9))
        assert schema.board_size == 5
        assert schema.seed == 9
        assert schema.allow_undo is True

    def test_config_rejects_zero_size(self):
        with pytest.raises(ValidationError):
            GameConfigSchema(board_size=0)


class TestReplaySchemas:
    """Tests for replay conversion."""

    def _replay(self):
        recorder = ReplayRecorder(GameConfig(seed=8))
        for direction in [Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN] * 3:
            recorder.make_move(direction)
        return recorder.stop_recording()

    def test_json_round_trip(self):
        replay = self._replay()
        payload = replay_to_schema(replay).model_dump_json()
        restored = replay_from_schema(json.loads(payload))
        assert restored.directions == replay.directions
        assert restored.config == replay.config
        assert restored.initial_board == replay.initial_board
        assert restored.final_state == replay.final_state

    def test_restored_replay_plays_back(self):
        replay = self._replay()
        restored = replay_from_schema(replay_to_schema(replay).model_dump_json())
        player = ReplayPlayer(restored)
        player.go_to_move(player.total_moves)
        assert player.current_game.board.to_rows() == replay.moves[-1].board_after

    def test_direction_string(self):
        replay = self._replay()
        letters = replay_directions(replay)
        assert len(letters) == len(replay.moves)
        assert set(letters) <= set("UDLR")
        assert replay_directions(replay_to_schema(replay)) == letters

    def test_bad_direction(self):
        data = replay_to_schema(self._replay()).model_dump(mode="json")
        data["moves"][0]["direction"] = "sideways"
        with pytest.raises(SerializationError):
            replay_from_schema(data)
