"""
Oche - User Manager

Read operations for the `users` table (player profiles and walk-ons).
"""

from supabase import Client

from src.database.models import UserProfile


class UserManager:
    """Looks up player profiles in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("users")

    def get(self, user_id: str) -> UserProfile | None:
        """Get a single profile by user ID."""
        data = (
            self.table
            .select("*")
            .eq("id", user_id)
            .execute()
        )
        if data.data:
            return UserProfile.model_validate(data.data[0])
        return None
