"""
Oche - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Any, Sequence

from src.engine.base import VISIT_SIZE, Multiplier, Segment, Visit


def validate_segment(segment: Any) -> Segment:
    """
    Validate a dart about to be recorded.

    Args:
        segment: Object expected to be a Segment

    Returns:
        The segment unchanged

    Raises:
        ValueError: If it is not a Segment
    """
    if not isinstance(segment, Segment):
        raise ValueError(f"Expected a Segment, got {type(segment).__name__}.")
    return segment


def validate_visit(visit: Sequence[Segment | None]) -> Visit:
    """
    Validate the slot layout of a visit.

    Args:
        visit: Sequence of three Segment-or-None slots

    Returns:
        Validated visit as a list

    Raises:
        ValueError: If the length is wrong, a slot is not a Segment, empty
            slots are not a contiguous suffix, or the visit is fully empty
    """
    slots = list(visit)
    if len(slots) != VISIT_SIZE:
        raise ValueError(f"A visit has exactly {VISIT_SIZE} slots, got {len(slots)}.")

    seen_empty = False
    for i, slot in enumerate(slots):
        if slot is None:
            seen_empty = True
            continue
        if not isinstance(slot, Segment):
            raise ValueError(f"Visit slot {i} must be a Segment, got {type(slot).__name__}.")
        if seen_empty:
            raise ValueError(f"Visit slot {i} is filled after an empty slot.")

    if slots[0] is None:
        raise ValueError("An empty visit cannot be stored.")

    return slots


def validate_player_count(count: int, minimum: int = 1, maximum: int | None = None) -> int:
    """
    Validate number of players.

    Args:
        count: Number of players
        minimum: Fewest players the variant allows
        maximum: Most players the variant allows (None = no limit)

    Returns:
        Validated count

    Raises:
        ValueError: If count is out of range
    """
    if not isinstance(count, int):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if count < minimum:
        raise ValueError(f"At least {minimum} players required, got {count}.")

    if maximum is not None and count > maximum:
        raise ValueError(f"At most {maximum} players allowed, got {count}.")

    return count


def validate_start_score(score: int) -> int:
    """
    Validate the starting score of an X01 game.

    Raises:
        ValueError: If score is not a positive integer
    """
    if not isinstance(score, int) or isinstance(score, bool):
        raise ValueError(f"Start score must be an integer, got {type(score).__name__}.")

    if score <= 1:
        raise ValueError(f"Start score must be greater than 1, got {score}.")

    return score


def validate_multiplier_option(name: str, value: int) -> int:
    """
    Validate a ring option (finish rule or Round the Clock mode).

    Raises:
        ValueError: If value is not 1, 2 or 3
    """
    valid = {m.value for m in Multiplier}
    if value not in valid:
        raise ValueError(f"Option '{name}' must be one of {sorted(valid)}, got {value}.")
    return value
