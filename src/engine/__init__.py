"""
Oche Game Engine.

Pure Python darts rules with zero UI/database dependencies.
Derives turn order, remaining scores, busts and results from throw history.
"""

from src.engine.base import (
    Game,
    GameController,
    GameState,
    GameType,
    Leg,
    Multiplier,
    PlayerProgress,
    Segment,
    Visit,
)
from src.engine.games import (
    GAME_TYPE_NAMES,
    create_game,
    get_game_controller,
    get_game_display_name,
    get_game_points,
    get_min_player_count,
)
from src.engine.killer import KillerEngine
from src.engine.round_the_clock import RandomRoundTheClockEngine, RoundTheClockEngine
from src.engine.x01 import X01Engine

__all__ = [
    # Data Classes
    "Game",
    "GameState",
    "Leg",
    "PlayerProgress",
    "Segment",
    "Visit",
    # Enums
    "GameType",
    "Multiplier",
    # Engines
    "GameController",
    "KillerEngine",
    "RandomRoundTheClockEngine",
    "RoundTheClockEngine",
    "X01Engine",
    # Dispatch
    "GAME_TYPE_NAMES",
    "create_game",
    "get_game_controller",
    "get_game_display_name",
    "get_game_points",
    "get_min_player_count",
]
