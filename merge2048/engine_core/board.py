"""
Board - Fixed-size square grid of tiles.

Design principles:
- Size is fixed at construction, the grid never resizes
- Created empty, populated only through set_tile
- All access is bounds-checked and raises InvalidPositionError
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import InvalidBoardSizeError, InvalidPositionError


@dataclass
class Tile:
    """
    One cell of the board.

    value == 0 means empty; otherwise value is a power of two >= 2.
    """
    value: int = 0

    @classmethod
    def empty(cls) -> Tile:
        return cls(0)

    def is_empty(self) -> bool:
        return self.value == 0

    def can_merge_with(self, other: Tile) -> bool:
        """Both tiles are non-empty and carry the same value."""
        return not self.is_empty() and not other.is_empty() and self.value == other.value

    def merge_with(self, other: Tile) -> int:
        """
        Absorb an equal tile, doubling this tile's value.

        Returns the new value as the points awarded, or 0 if the tiles
        can't merge. The caller is responsible for clearing the other tile.
        """
        if not self.can_merge_with(other):
            return 0
        self.value *= 2
        return self.value

    def color_index(self) -> int:
        """Exponent of the value (0 for empty), used by renderers for palettes."""
        if self.is_empty():
            return 0
        return self.value.bit_length() - 1


class Board:
    """
    Row-major size x size grid of Tiles.

    Usage:
        board = Board(4)
        board.set_tile(0, 0, Tile(2))
        board.empty_positions()  # [(0, 1), (0, 2), ...]
    """

    def __init__(self, size: int):
        if size <= 0:
            raise InvalidBoardSizeError(size)
        self._size = size
        self._tiles: list[list[Tile]] = [[Tile() for _ in range(size)] for _ in range(size)]

    @property
    def size(self) -> int:
        return self._size

    def _check(self, row: int, col: int):
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise InvalidPositionError(row, col)

    def get_tile(self, row: int, col: int) -> Tile:
        """Return a copy of the tile at (row, col)."""
        self._check(row, col)
        return Tile(self._tiles[row][col].value)

    def set_tile(self, row: int, col: int, tile: Tile):
        """Place a copy of tile at (row, col)."""
        self._check(row, col)
        self._tiles[row][col] = Tile(tile.value)

    def is_empty_at(self, row: int, col: int) -> bool:
        return self.get_tile(row, col).is_empty()

    def empty_positions(self) -> list[tuple[int, int]]:
        """All empty cells in row-major scan order."""
        return [
            (row, col)
            for row in range(self._size)
            for col in range(self._size)
            if self._tiles[row][col].value == 0
        ]

    def is_full(self) -> bool:
        return not self.empty_positions()

    def has_valid_moves(self) -> bool:
        """
        True if any empty cell exists or any right/down neighbour pair can merge.

        Merging is symmetric, so checking each cell's right and down
        neighbours once covers every adjacent pair.
        """
        if not self.is_full():
            return True

        for row in range(self._size):
            for col in range(self._size):
                current = self._tiles[row][col]
                if col + 1 < self._size and current.can_merge_with(self._tiles[row][col + 1]):
                    return True
                if row + 1 < self._size and current.can_merge_with(self._tiles[row + 1][col]):
                    return True

        return False

    def max_tile(self) -> int:
        """Largest value on the board (0 if empty)."""
        return max(tile.value for row in self._tiles for tile in row)

    def count_tiles(self, value: int) -> int:
        """Count cells holding exactly this value."""
        return sum(1 for row in self._tiles for tile in row if tile.value == value)

    def total(self) -> int:
        """Sum of all tile values."""
        return sum(tile.value for row in self._tiles for tile in row)

    def to_rows(self) -> list[list[int]]:
        """Plain nested-list view of the tile values."""
        return [[tile.value for tile in row] for row in self._tiles]

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Board:
        """Build a board from a square nested list of values."""
        board = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != board.size:
                raise InvalidPositionError(r, len(row) - 1)
            for c, value in enumerate(row):
                board.set_tile(r, c, Tile(value))
        return board

    def clone(self) -> Board:
        board = Board.__new__(Board)
        board._size = self._size
        board._tiles = [[Tile(tile.value) for tile in row] for row in self._tiles]
        return board

    def __eq__(self, other):
        if not isinstance(other, Board):
            return False
        return self._size == other._size and self.to_rows() == other.to_rows()

    def __repr__(self):
        return f"Board(size={self._size}, rows={self.to_rows()})"
