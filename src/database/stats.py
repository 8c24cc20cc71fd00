"""
Oche - Statistics Trigger

Asks the backend to recompute aggregate statistics after a game is saved.
"""

import logging

from supabase import Client

logger = logging.getLogger(__name__)


class StatsManager:
    """Fire-and-forget refresh of the statistics views."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def refresh(self) -> bool:
        """Trigger a statistics refresh.

        Failures are logged and never raised; the saved game stays saved.

        Returns:
            True if the refresh request was accepted
        """
        try:
            self.client.rpc("refresh_stats").execute()
        except Exception:
            logger.exception("Statistics refresh failed")
            return False
        logger.debug("Statistics refresh requested")
        return True
