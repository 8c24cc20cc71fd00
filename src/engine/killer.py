"""
Oche - Killer Engine

Elimination game for two or more players. Every player guards a private
board number (assigned when the game is created) and starts with five lives.

Rules:
    - Hitting the double or triple of your own number makes you a killer
    - A killer hitting an opponent's number takes lives from them: one for
      a single, two for a double, three for a triple
    - A killer hitting their own number loses lives the same way
    - A player at zero lives is eliminated; an eliminated thrower's turn
      ends at once
    - The last player with lives wins; results list the winner first, then
      the eliminated players in elimination order
"""

from dataclasses import replace
from typing import ClassVar

from src.engine.base import (
    GameController,
    Leg,
    Multiplier,
    PlayerProgress,
    Visit,
    visit_segments,
)


class KillerEngine(GameController):
    """Rule engine for Killer."""

    MIN_PLAYERS: ClassVar[int] = 2
    LIVES = 5

    @classmethod
    def number_of(cls, leg: Leg) -> int:
        """Private number stored on the leg."""
        number = leg.attributes.get("number")
        if not isinstance(number, int) or not 1 <= number <= 20:
            raise ValueError(f"Leg {leg.id} has no valid killer number.")
        return number

    def initial_progress(self, leg: Leg) -> PlayerProgress:
        return PlayerProgress(
            user_id=leg.user_id,
            points=self.LIVES,
            target=self.number_of(leg),
        )

    def play_visit(
        self,
        leg: Leg,
        visit: Visit,
        progress: dict[str, PlayerProgress],
    ) -> list[str]:
        owners = {player.target: player.user_id for player in progress.values()}
        eliminated: list[str] = []

        for segment in visit_segments(visit):
            owner = owners.get(segment.value)
            if owner is None:
                continue

            shooter = progress[leg.user_id]
            if not shooter.is_killer:
                if owner == leg.user_id and segment.multiplier != Multiplier.SINGLE:
                    progress[leg.user_id] = replace(shooter, is_killer=True)
                continue

            victim = progress[owner]
            if victim.finished:
                continue
            lives = max(0, victim.points - segment.multiplier.value)
            progress[owner] = replace(victim, points=lives, finished=lives == 0)
            if lives > 0:
                continue

            eliminated.append(owner)
            if owner == leg.user_id or self._unfinished_count(progress) <= 1:
                break

        return eliminated

    def final_results(self, results: list[str], remaining: list[str]) -> list[str]:
        return remaining + results
