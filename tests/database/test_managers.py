"""Tests for src/database managers — Supabase table access with a mocked client."""

from unittest.mock import MagicMock

import pytest

from src.database.games import GameManager
from src.database.legs import LegManager
from src.database.models import GameRecord, LegRecord, UserProfile
from src.database.stats import StatsManager
from src.database.users import UserManager
from src.engine.base import GameType, Segment
from src.engine.games import create_game


@pytest.fixture
def mock_client():
    """Minimal mock Supabase client echoing inserted rows back."""
    client = MagicMock()
    table = client.table.return_value
    table.insert.side_effect = lambda row: MagicMock(
        execute=MagicMock(return_value=MagicMock(data=[row]))
    )
    return client


@pytest.fixture
def game():
    game = create_game(GameType.X01, ["alice", "bob"], {"start_score": 301})
    game.legs[0].visits = [[Segment.triple(20), Segment.miss(), None]]
    game.result = ["alice"]
    return game


class TestLegManager:
    def test_uses_legs_table(self, mock_client):
        LegManager(mock_client)
        mock_client.table.assert_called_once_with("legs")

    def test_insert_serializes_visits(self, mock_client, game):
        record = LegManager(mock_client).insert(game.legs[0])

        row = mock_client.table.return_value.insert.call_args[0][0]
        assert row["visits"] == [[{"value": 20, "multiplier": 3}, {"value": 0, "multiplier": 1}, None]]
        assert row["type"] == "x01"
        assert row["user_id"] == "alice"
        assert isinstance(record, LegRecord)
        assert record.id == game.legs[0].id


class TestGameManager:
    def test_uses_games_table(self, mock_client):
        GameManager(mock_client)
        mock_client.table.assert_called_once_with("games")

    def test_insert_references_legs_by_id(self, mock_client, game):
        record = GameManager(mock_client).insert(game)

        row = mock_client.table.return_value.insert.call_args[0][0]
        assert row["legs"] == [leg.id for leg in game.legs]
        assert row["result"] == ["alice"]
        assert row["attributes"] == {"start_score": 301, "finish": 1}
        assert isinstance(record, GameRecord)


class TestUserManager:
    def test_get_existing_profile(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [
            {"id": "u1", "name": "Phil", "walk_on": "power.mp3", "walk_on_time": 6}
        ]

        profile = UserManager(mock_client).get("u1")

        mock_client.table.return_value.select.return_value.eq.assert_called_once_with("id", "u1")
        assert profile == UserProfile(id="u1", name="Phil", walk_on="power.mp3", walk_on_time=6)

    def test_get_missing_profile(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = []
        assert UserManager(mock_client).get("nobody") is None


class TestStatsManager:
    def test_refresh_calls_rpc(self, mock_client):
        assert StatsManager(mock_client).refresh() is True
        mock_client.rpc.assert_called_once_with("refresh_stats")

    def test_refresh_failure_is_logged_not_raised(self, mock_client, caplog):
        mock_client.rpc.return_value.execute.side_effect = Exception("timeout")
        assert StatsManager(mock_client).refresh() is False
        assert "Statistics refresh failed" in caplog.text
