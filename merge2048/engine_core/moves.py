"""
Moves - Directions and the directional collapse algorithm.

A move collapses every line (row or column) of the board toward one edge.
Each line is handled independently in three passes:

1. Compact: slide non-empty tiles toward the edge, keeping their order
2. Merge: from the edge inward, merge equal neighbours once per move
3. Re-compact: close the gaps left by merges

All four directions share the same line routine; a direction only decides
which cells make up each line and in which order they are read.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING

from .board import Tile

if TYPE_CHECKING:
    from .board import Board
    from .score import Score


class Direction(Enum):
    """Direction of a move."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Parse 'up', 'U', 'Left', ... into a Direction."""
        key = text.strip().lower()
        for direction in cls:
            if key == direction.value or key == direction.value[0]:
                return direction
        raise ValueError(f"Unknown direction: {text!r}")


# Enumeration order used by every search strategy
ALL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def line_positions(size: int, direction: Direction) -> list[list[tuple[int, int]]]:
    """
    Cells of every line for a direction, each ordered from the target edge inward.
    """
    edge_first = range(size)
    edge_last = range(size - 1, -1, -1)

    if direction == Direction.LEFT:
        return [[(row, col) for col in edge_first] for row in range(size)]
    if direction == Direction.RIGHT:
        return [[(row, col) for col in edge_last] for row in range(size)]
    if direction == Direction.UP:
        return [[(row, col) for row in edge_first] for col in range(size)]
    return [[(row, col) for row in edge_last] for col in range(size)]


def _compact(tiles: list[Tile]) -> tuple[list[Tile], bool]:
    """Slide non-empty tiles to the front, preserving order."""
    filled = [tile for tile in tiles if not tile.is_empty()]
    compacted = filled + [Tile.empty() for _ in range(len(tiles) - len(filled))]
    changed = [t.value for t in compacted] != [t.value for t in tiles]
    return compacted, changed


def _merge(tiles: list[Tile], score: Score) -> bool:
    """
    Merge equal neighbours in place, from the front of the line.

    A tile that is the result of a merge never merges again in the same move,
    so 2,2,2 becomes 4,_,2 and not 8.
    """
    changed = False
    consumed = [False] * len(tiles)

    for i in range(len(tiles) - 1):
        if consumed[i]:
            continue
        nearer, farther = tiles[i], tiles[i + 1]
        if nearer.can_merge_with(farther):
            points = nearer.merge_with(farther)
            tiles[i + 1] = Tile.empty()
            score.add_merge_points(points)
            consumed[i] = True
            changed = True

    return changed


def collapse_line(tiles: list[Tile], score: Score) -> tuple[list[Tile], bool]:
    """
    Collapse one line ordered from the target edge inward.

    Returns (new tiles, moved).
    """
    tiles, compacted = _compact(tiles)
    merged = _merge(tiles, score)
    tiles, recompacted = _compact(tiles)
    return tiles, compacted or merged or recompacted


def collapse_board(board: Board, direction: Direction, score: Score) -> bool:
    """
    Collapse every line of the board toward the direction's edge.

    Merge points are awarded to score as they happen.
    Returns True if any tile moved or merged.
    """
    moved = False
    for positions in line_positions(board.size, direction):
        tiles = [board.get_tile(row, col) for row, col in positions]
        tiles, line_moved = collapse_line(tiles, score)
        if line_moved:
            for (row, col), tile in zip(positions, tiles):
                board.set_tile(row, col, tile)
            moved = True
    return moved
