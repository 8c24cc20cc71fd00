"""
Oche - Game Dispatch

Maps a game's variant and options to its rule engine, and provides the
per-variant metadata (player minimum, display name, starting points).
Also builds new games, generating per-leg data exactly once.
"""

import random
from typing import Any, Sequence

from src.engine.base import (
    BOARD_NUMBERS,
    Game,
    GameController,
    GameType,
    Leg,
    get_type_attribute,
)
from src.engine.killer import KillerEngine
from src.engine.round_the_clock import RandomRoundTheClockEngine, RoundTheClockEngine
from src.engine.validators import (
    validate_multiplier_option,
    validate_player_count,
    validate_start_score,
)
from src.engine.x01 import X01Engine

GAME_TYPE_NAMES: dict[GameType, str] = {
    GameType.X01: "X01",
    GameType.ROUND_THE_CLOCK: "Round the Clock",
    GameType.KILLER: "Killer",
}


def get_min_player_count(game_type: GameType) -> int:
    """Fewest players a variant can be played with."""
    if game_type == GameType.KILLER:
        return KillerEngine.MIN_PLAYERS
    return 1


def get_game_display_name(game: Game | None) -> str:
    """Human-readable label combining the variant with its options."""
    if game is None:
        return "Empty Game"

    if game.type == GameType.ROUND_THE_CLOCK:
        mode = ["", " Double", " Triple"][get_type_attribute(game, "mode", 1) - 1]
        random_order = " Random" if get_type_attribute(game, "random", False) else ""
        fast = " Fast" if get_type_attribute(game, "fast", False) else ""
        return f"Round the Clock{mode}{random_order}{fast}"

    if game.type == GameType.X01:
        start_score = get_type_attribute(game, "start_score", X01Engine.DEFAULT_START_SCORE)
        finish = ["Single", "Double", "Triple"][get_type_attribute(game, "finish", 1) - 1]
        return f"{start_score} {finish} Finish"

    return GAME_TYPE_NAMES[game.type]


def get_game_points(record: Game | Leg) -> int:
    """Points every player starts with: score, targets or lives."""
    if record.type == GameType.ROUND_THE_CLOCK:
        return len(RoundTheClockEngine.SEQUENCE)
    if record.type == GameType.X01:
        return get_type_attribute(record, "start_score", X01Engine.DEFAULT_START_SCORE)
    return KillerEngine.LIVES


def get_game_controller(game: Game) -> GameController:
    """Rule engine for the game's variant and options."""
    if game.type == GameType.X01:
        return X01Engine(game)
    if game.type == GameType.ROUND_THE_CLOCK:
        if get_type_attribute(game, "random", False):
            return RandomRoundTheClockEngine(game)
        return RoundTheClockEngine(game)
    if game.type == GameType.KILLER:
        return KillerEngine(game)
    raise ValueError(f"Unknown game type: {game.type!r}")


def create_game(
    game_type: GameType,
    user_ids: Sequence[str],
    attributes: dict[str, Any] | None = None,
    rng: random.Random | None = None,
) -> Game:
    """
    Build a new game with one leg per user, in turn order.

    Random target orders and killer numbers are generated here and stored on
    the legs, so replaying or reloading the game always sees the same values.

    Args:
        game_type: Variant to play
        user_ids: Participating users, in throwing order
        attributes: Variant options
        rng: Random source (for reproducible tests)

    Returns:
        A fresh Game with empty legs

    Raises:
        ValueError: If the options or player list are invalid
    """
    rng = rng or random.Random()
    attributes = dict(attributes or {})

    if len(set(user_ids)) != len(user_ids):
        raise ValueError("Each user can only play one leg per game.")
    maximum = len(BOARD_NUMBERS) if game_type == GameType.KILLER else None
    validate_player_count(len(user_ids), get_min_player_count(game_type), maximum)

    if game_type == GameType.X01:
        attributes.setdefault("start_score", X01Engine.DEFAULT_START_SCORE)
        attributes.setdefault("finish", X01Engine.DEFAULT_FINISH.value)
        validate_start_score(attributes["start_score"])
        validate_multiplier_option("finish", attributes["finish"])
    elif game_type == GameType.ROUND_THE_CLOCK:
        attributes.setdefault("mode", 1)
        attributes.setdefault("random", False)
        attributes.setdefault("fast", False)
        validate_multiplier_option("mode", attributes["mode"])

    legs = [Leg(user_id=user_id, type=game_type) for user_id in user_ids]

    if game_type == GameType.ROUND_THE_CLOCK and attributes["random"]:
        for leg in legs:
            sequence = list(RoundTheClockEngine.SEQUENCE)
            rng.shuffle(sequence)
            leg.attributes["sequence"] = sequence
    elif game_type == GameType.KILLER:
        numbers = rng.sample(BOARD_NUMBERS, len(legs))
        for leg, number in zip(legs, numbers):
            leg.attributes["number"] = number

    return Game(type=game_type, attributes=attributes, legs=legs)
