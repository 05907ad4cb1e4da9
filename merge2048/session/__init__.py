"""
Session Module - Drives games beyond single moves.

Provides:
- AIGameController: lets an AIPlayer play a live game
- ReplayRecorder / ReplayPlayer: record a game and step through it again
- ReplayManager: in-memory collection of replays

Nothing here is persisted; use api.schemas to serialize.
"""

from .controller import AIGameController, AutoPlayResult
from .replay import (
    ReplayData,
    ReplayManager,
    ReplayMetadata,
    ReplayMove,
    ReplayPlayer,
    ReplayRecorder,
)

__all__ = [
    "AIGameController",
    "AutoPlayResult",
    "ReplayData",
    "ReplayManager",
    "ReplayMetadata",
    "ReplayMove",
    "ReplayPlayer",
    "ReplayRecorder",
]
