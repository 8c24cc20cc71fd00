"""
Oche Scoring Session.

Records and undoes darts for the active game and persists it.
"""

from src.session.errors import (
    InvalidGameError,
    NoActiveGameError,
    NoCurrentPlayerError,
    PlayerFinishedError,
    SessionError,
)
from src.session.game_session import GameSession
from src.session.snapshot import SnapshotStore

__all__ = [
    "GameSession",
    "InvalidGameError",
    "NoActiveGameError",
    "NoCurrentPlayerError",
    "PlayerFinishedError",
    "SessionError",
    "SnapshotStore",
]
