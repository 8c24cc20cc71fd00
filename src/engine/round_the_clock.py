"""
Oche - Round the Clock Engines

Players clear targets 1 through 20 and then the bull, in order. A dart only
counts when it hits the current target in the ring the game mode asks for;
misses never move a player backwards. Clearing the last target finishes the
leg.

Options:
    - mode: 1 = any ring, 2 = doubles only, 3 = triples only (the bull is
      capped at its double ring)
    - fast: in mode 1, a double advances two targets and a triple three;
      the last target still has to be hit on its own
    - random: each leg plays its own shuffled target order, generated once
      when the game is created and stored on the leg
"""

from dataclasses import replace

from src.engine.base import (
    BOARD_NUMBERS,
    BULL,
    GameController,
    Leg,
    Multiplier,
    PlayerProgress,
    Segment,
    Visit,
    get_type_attribute,
    visit_segments,
)


class RoundTheClockEngine(GameController):
    """Rule engine for Round the Clock in the canonical 1-20-bull order."""

    SEQUENCE: tuple[int, ...] = BOARD_NUMBERS + (BULL,)

    @property
    def mode(self) -> Multiplier:
        return Multiplier(get_type_attribute(self.game, "mode", Multiplier.SINGLE.value))

    @property
    def fast(self) -> bool:
        return bool(get_type_attribute(self.game, "fast", False))

    def sequence_for(self, leg: Leg) -> tuple[int, ...]:
        """Target order played by this leg."""
        return self.SEQUENCE

    @classmethod
    def is_hit(cls, segment: Segment, target: int, mode: Multiplier) -> bool:
        """
        Check whether a dart clears the target.

        Args:
            segment: The dart thrown
            target: Current target of the player
            mode: Ring required by the game

        Returns:
            True if the dart counts for the target
        """
        if segment.value != target:
            return False
        if mode == Multiplier.SINGLE:
            return True
        required = Multiplier.DOUBLE if target == BULL else mode
        return segment.multiplier == required

    def initial_progress(self, leg: Leg) -> PlayerProgress:
        sequence = self.sequence_for(leg)
        return PlayerProgress(
            user_id=leg.user_id,
            points=len(sequence),
            target=sequence[0],
        )

    def play_visit(
        self,
        leg: Leg,
        visit: Visit,
        progress: dict[str, PlayerProgress],
    ) -> list[str]:
        sequence = self.sequence_for(leg)
        mode = self.mode
        last = len(sequence) - 1
        position = len(sequence) - progress[leg.user_id].points

        for segment in visit_segments(visit):
            if not self.is_hit(segment, sequence[position], mode):
                continue
            if position == last:
                position = len(sequence)
                break
            step = segment.multiplier.value if self.fast and mode == Multiplier.SINGLE else 1
            position = min(position + step, last)

        finished = position == len(sequence)
        progress[leg.user_id] = replace(
            progress[leg.user_id],
            points=len(sequence) - position,
            target=None if finished else sequence[position],
            finished=finished,
        )
        return [leg.user_id] if finished else []


class RandomRoundTheClockEngine(RoundTheClockEngine):
    """Round the Clock against each leg's stored random target order."""

    def sequence_for(self, leg: Leg) -> tuple[int, ...]:
        sequence = leg.attributes.get("sequence")
        if not sequence or sorted(sequence) != sorted(self.SEQUENCE):
            raise ValueError(
                f"Leg {leg.id} has no valid target sequence. "
                "Random legs must be created with one."
            )
        return tuple(sequence)
