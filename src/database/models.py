"""
Oche - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from typing import Any

from pydantic import BaseModel, Field

from src.engine.base import Game, Leg


class UserProfile(BaseModel):
    """Mirrors the `users` table."""

    id: str
    name: str = Field(max_length=30)
    walk_on: str | None = None
    walk_on_time: int = 0

    model_config = {"from_attributes": True}


class SegmentRecord(BaseModel):
    """One dart as stored inside a leg's `visits` column."""

    value: int
    multiplier: int


class LegRecord(BaseModel):
    """Mirrors the `legs` table."""

    id: str
    user_id: str
    type: str
    visits: list[list[SegmentRecord | None]] = Field(default_factory=list)
    finish: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True}

    @classmethod
    def from_leg(cls, leg: Leg) -> "LegRecord":
        return cls(
            id=leg.id,
            user_id=leg.user_id,
            type=leg.type.value,
            visits=[
                [
                    None if slot is None
                    else SegmentRecord(value=slot.value, multiplier=slot.multiplier.value)
                    for slot in visit
                ]
                for visit in leg.visits
            ],
            finish=leg.finish,
            attributes=dict(leg.attributes),
        )


class GameRecord(BaseModel):
    """Mirrors the `games` table. Legs are referenced by id."""

    id: str
    type: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    legs: list[str] = Field(default_factory=list)
    result: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @classmethod
    def from_game(cls, game: Game) -> "GameRecord":
        return cls(
            id=game.id,
            type=game.type.value,
            attributes=dict(game.attributes),
            legs=[leg.id for leg in game.legs],
            result=list(game.result),
        )
