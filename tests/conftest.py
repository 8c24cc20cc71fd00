"""
Oche - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from unittest.mock import MagicMock

import pytest

from src.database.models import UserProfile
from src.engine.base import Game, GameType, Leg, Segment, Visit
from src.engine.games import create_game
from src.session.game_session import GameSession
from src.session.snapshot import SnapshotStore


def _visit(*segments: Segment) -> Visit:
    return list(segments) + [None] * (3 - len(segments))


# =============================================================================
# DATA MODEL HELPERS
# =============================================================================

@pytest.fixture
def visit():
    """Build a visit from up to three segments, padding with empty slots."""
    return _visit


@pytest.fixture
def make_game():
    """
    Build a game whose legs already hold the given visits.

    Usage: make_game(GameType.X01, {"a": [visit, ...], "b": []}, start_score=301)
    """
    def _make(game_type: GameType, history: dict[str, list[Visit]], **attributes) -> Game:
        game = create_game(game_type, list(history), attributes, rng=random.Random(7))
        for leg in game.legs:
            leg.visits = [list(v) for v in history[leg.user_id]]
        return game

    return _make


@pytest.fixture
def x01_301(make_game) -> Game:
    """Fresh two-player 301 single-finish game."""
    return make_game(GameType.X01, {"alice": [], "bob": []}, start_score=301, finish=1)


# =============================================================================
# SESSION FIXTURES
# =============================================================================

@pytest.fixture
def users() -> MagicMock:
    """Profile lookup returning a walk-on for every user."""
    manager = MagicMock()
    manager.get.side_effect = lambda user_id: UserProfile(
        id=user_id,
        name=user_id.title(),
        walk_on=f"{user_id}.mp3",
        walk_on_time=4,
    )
    return manager


@pytest.fixture
def remote() -> MagicMock:
    """Parent mock for the remote collaborators, so call order is recorded."""
    return MagicMock()


@pytest.fixture
def snapshot_store(tmp_path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "snapshots" / "current_game.json")


@pytest.fixture
def session(users, remote, snapshot_store) -> GameSession:
    return GameSession(
        users=users,
        legs=remote.legs,
        games=remote.games,
        stats=remote.stats,
        snapshots=snapshot_store,
    )


@pytest.fixture
def single_leg_killer() -> Game:
    """Killer game with only one participant."""
    return Game(
        type=GameType.KILLER,
        legs=[Leg(user_id="alice", type=GameType.KILLER, attributes={"number": 7})],
    )
