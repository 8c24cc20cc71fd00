"""Tests for src/database/models.py — row models built from engine records."""

import pytest
from pydantic import ValidationError

from src.database.models import GameRecord, LegRecord, UserProfile
from src.engine.base import GameType, Segment
from src.engine.games import create_game


class TestLegRecord:
    def test_from_leg(self):
        game = create_game(GameType.KILLER, ["a", "b"])
        leg = game.legs[1]
        leg.visits = [[Segment.double(7), None, None]]
        leg.finish = True

        record = LegRecord.from_leg(leg)

        assert record.id == leg.id
        assert record.type == "killer"
        assert record.finish is True
        assert record.attributes == {"number": leg.attributes["number"]}
        assert record.visits[0][0].value == 7
        assert record.visits[0][0].multiplier == 2
        assert record.visits[0][1] is None

    def test_attributes_are_copied(self):
        game = create_game(GameType.KILLER, ["a", "b"])
        record = LegRecord.from_leg(game.legs[0])
        record.attributes["number"] = 99
        assert game.legs[0].attributes["number"] != 99


class TestGameRecord:
    def test_from_game(self):
        game = create_game(GameType.ROUND_THE_CLOCK, ["a", "b"], {"mode": 2})
        game.result = ["b", "a"]

        record = GameRecord.from_game(game)

        assert record.type == "rtc"
        assert record.legs == [leg.id for leg in game.legs]
        assert record.result == ["b", "a"]
        assert record.attributes["mode"] == 2


class TestUserProfile:
    def test_defaults(self):
        profile = UserProfile(id="u1", name="Phil")
        assert profile.walk_on is None
        assert profile.walk_on_time == 0

    def test_name_length_limit(self):
        with pytest.raises(ValidationError):
            UserProfile(id="u1", name="x" * 31)
