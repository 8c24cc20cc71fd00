"""
Oche - Local Snapshot Store

Keeps a single JSON snapshot of the match in progress on disk so it can be
recovered after a crash or reload. Overwritten on every throw.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from src.engine.base import Game

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Persist the active game as one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._adapter: TypeAdapter[Game] = TypeAdapter(Game)

    def save(self, game: Game) -> Path:
        """Serialize the game, replacing any previous snapshot."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._adapter.dump_json(game, indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(payload)
        tmp_path.replace(self.path)
        logger.debug("Snapshot of game %s written to %s", game.id, self.path)
        return self.path

    def load(self) -> Game | None:
        """Load the stored game, or None when there is no snapshot."""
        if not self.path.exists():
            return None
        return self._adapter.validate_json(self.path.read_bytes())

    def clear(self) -> None:
        """Remove the snapshot if it exists."""
        if self.path.exists():
            self.path.unlink()
