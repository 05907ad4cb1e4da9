"""
Errors - The game error taxonomy.

Every fallible operation in the core raises a subclass of GameError.
Each error carries a machine-readable error_code so UI and persistence
layers can react without string matching:

- INVALID_MOVE: A move was rejected (reserved, the collapse never raises it)
- GAME_OVER: A move was attempted after the game finished
- INVALID_POSITION: Board access outside [0, size)
- INVALID_BOARD_SIZE: Board constructed with size 0
- NO_UNDO_AVAILABLE: Undo disabled or no snapshot held
- INVALID_OPERATION: Strategy-layer or replay failures
- SERIALIZATION_ERROR: Structural data could not be converted
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for all game errors."""

    error_code = "GAME_ERROR"


class InvalidMoveError(GameError):
    """Raised when a move is rejected."""

    error_code = "INVALID_MOVE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid move: {reason}")


class GameOverError(GameError):
    """Raised by make_move when the game is no longer being played."""

    error_code = "GAME_OVER"

    def __init__(self):
        super().__init__("Game is already over")


class InvalidPositionError(GameError, IndexError):
    """Raised on out-of-range board access."""

    error_code = "INVALID_POSITION"

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(f"Invalid board position: ({row}, {col})")


class InvalidBoardSizeError(GameError, ValueError):
    """Raised when a board is created with a non-positive size."""

    error_code = "INVALID_BOARD_SIZE"

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Invalid board size: {size} (must be > 0)")


class NoUndoAvailableError(GameError):
    """Raised when undo is disabled or there is nothing to undo."""

    error_code = "NO_UNDO_AVAILABLE"

    def __init__(self):
        super().__init__("No undo available")


class InvalidOperationError(GameError):
    """Catch-all for strategy-layer and replay failures."""

    error_code = "INVALID_OPERATION"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid operation: {reason}")


class SerializationError(GameError, ValueError):
    """Raised when structural data cannot be converted to core types."""

    error_code = "SERIALIZATION_ERROR"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Serialization error: {reason}")
