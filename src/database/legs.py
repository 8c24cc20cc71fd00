"""
Oche - Leg Manager

Insert operations for the `legs` table.
"""

from supabase import Client

from src.database.models import LegRecord
from src.engine.base import Leg


class LegManager:
    """Stores finished legs in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("legs")

    def insert(self, leg: Leg) -> LegRecord:
        """Persist a leg with its full visit history."""
        record = LegRecord.from_leg(leg)
        data = (
            self.table
            .insert(record.model_dump(mode="json"))
            .execute()
        )
        return LegRecord.model_validate(data.data[0])
