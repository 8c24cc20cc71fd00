"""
Oche - X01 Engine

Countdown from a fixed starting score; the first player to reach exactly
zero wins the leg.

Rules:
    - Each dart subtracts its points from the player's remaining score
    - Going below zero is a bust
    - With a double or triple finish, landing on 1 is a bust (it can never
      be checked out)
    - Reaching zero with a ring lower than the finish rule is a bust
    - A bust reverts the score to the start of the visit; later darts of
      that visit are ignored
    - Reaching zero legally finishes the leg immediately
"""

from dataclasses import replace

from src.engine.base import (
    GameController,
    Leg,
    Multiplier,
    PlayerProgress,
    Segment,
    Visit,
    get_type_attribute,
    visit_segments,
)


class X01Engine(GameController):
    """Rule engine for X01 games (301, 501, ...)."""

    DEFAULT_START_SCORE = 501
    DEFAULT_FINISH = Multiplier.SINGLE

    @property
    def start_score(self) -> int:
        return get_type_attribute(self.game, "start_score", self.DEFAULT_START_SCORE)

    @property
    def finish(self) -> Multiplier:
        return Multiplier(get_type_attribute(self.game, "finish", self.DEFAULT_FINISH.value))

    @classmethod
    def is_bust(cls, remaining: int, segment: Segment, finish: Multiplier) -> bool:
        """
        Check whether a dart busts.

        Args:
            remaining: Score left after applying the dart
            segment: The dart just thrown
            finish: Minimum ring required to check out

        Returns:
            True if the dart takes the score to an illegal value
        """
        if remaining < 0:
            return True
        if remaining == 1 and finish != Multiplier.SINGLE:
            return True
        if remaining == 0 and segment.multiplier.value < finish.value:
            return True
        return False

    def initial_progress(self, leg: Leg) -> PlayerProgress:
        return PlayerProgress(user_id=leg.user_id, points=self.start_score)

    def play_visit(
        self,
        leg: Leg,
        visit: Visit,
        progress: dict[str, PlayerProgress],
    ) -> list[str]:
        player = progress[leg.user_id]
        finish = self.finish
        remaining = player.points

        for segment in visit_segments(visit):
            remaining -= segment.points
            if self.is_bust(remaining, segment, finish):
                return []
            if remaining == 0:
                progress[leg.user_id] = replace(player, points=0, finished=True)
                return [leg.user_id]

        progress[leg.user_id] = replace(player, points=remaining)
        return []
