"""
Oche - Game Manager

Insert operations for the `games` table.
"""

from supabase import Client

from src.database.models import GameRecord
from src.engine.base import Game


class GameManager:
    """Stores finished games in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("games")

    def insert(self, game: Game) -> GameRecord:
        """Persist a game, referencing its legs by id.

        The legs must have been inserted first.
        """
        record = GameRecord.from_game(game)
        data = (
            self.table
            .insert(record.model_dump(mode="json"))
            .execute()
        )
        return GameRecord.model_validate(data.data[0])
