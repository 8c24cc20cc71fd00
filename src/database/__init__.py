"""
Oche Database Layer.

Supabase integration for player profiles and finished game persistence.
"""

from src.database.client import get_supabase_client
from src.database.games import GameManager
from src.database.legs import LegManager
from src.database.models import GameRecord, LegRecord, SegmentRecord, UserProfile
from src.database.stats import StatsManager
from src.database.users import UserManager

__all__ = [
    "get_supabase_client",
    "GameManager",
    "GameRecord",
    "LegManager",
    "LegRecord",
    "SegmentRecord",
    "StatsManager",
    "UserManager",
    "UserProfile",
]
