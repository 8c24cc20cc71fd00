"""
Oche - Game Engine Base Classes

This module defines the darts data model shared by every rule engine:
segments, visits, legs and games, plus the derived GameState and the
GameController base class that replays a game's throw history turn by turn.

Segments and game states are immutable (frozen dataclasses). Legs and games
are plain mutable records owned by the session; engines only read them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar
from uuid import uuid4


class Multiplier(Enum):
    """Ring of the board a dart landed in."""
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3


class GameType(Enum):
    """Available game variants."""
    X01 = "x01"
    ROUND_THE_CLOCK = "rtc"
    KILLER = "killer"


BULL = 25
MISS = 0
BOARD_NUMBERS = tuple(range(1, 21))
VISIT_SIZE = 3


@dataclass(frozen=True)
class Segment:
    """
    One scored dart.

    Attributes:
        value: Face value hit (0 for a miss, 1-20, or 25 for the bull)
        multiplier: Single, double or triple ring
    """
    value: int
    multiplier: Multiplier = Multiplier.SINGLE

    def __post_init__(self) -> None:
        """Validate the face value and ring combination."""
        if self.value != MISS and self.value != BULL and self.value not in BOARD_NUMBERS:
            raise ValueError(
                f"Invalid segment value {self.value}. "
                f"Must be 0, 1-20 or {BULL}."
            )
        if self.value == BULL and self.multiplier == Multiplier.TRIPLE:
            raise ValueError("The bull has no triple ring.")

    @property
    def points(self) -> int:
        """Score of this dart."""
        return self.value * self.multiplier.value

    @classmethod
    def single(cls, value: int) -> "Segment":
        return cls(value, Multiplier.SINGLE)

    @classmethod
    def double(cls, value: int) -> "Segment":
        return cls(value, Multiplier.DOUBLE)

    @classmethod
    def triple(cls, value: int) -> "Segment":
        return cls(value, Multiplier.TRIPLE)

    @classmethod
    def miss(cls) -> "Segment":
        return cls(MISS, Multiplier.SINGLE)

    def __str__(self) -> str:
        if self.value == MISS:
            return "0"
        prefix = {Multiplier.SINGLE: "", Multiplier.DOUBLE: "D", Multiplier.TRIPLE: "T"}
        return f"{prefix[self.multiplier]}{self.value}"


# A visit always has exactly three slots; None marks a dart not yet thrown.
Visit = list[Segment | None]


def new_visit() -> Visit:
    """An empty visit, ready to be filled left to right."""
    return [None] * VISIT_SIZE


def visit_is_full(visit: Visit) -> bool:
    """True once all three darts of the visit are recorded."""
    return all(slot is not None for slot in visit)


def visit_segments(visit: Visit) -> list[Segment]:
    """The recorded darts of a visit, in throw order."""
    return [slot for slot in visit if slot is not None]


def _new_id() -> str:
    return str(uuid4())


@dataclass
class Leg:
    """
    One user's participation in a game.

    Attributes:
        user_id: Identity of the player throwing this leg
        type: Variant of the owning game
        visits: Visits in throw order; only the last one may be partial
        finish: Whether the leg was completed (set when the game is saved)
        attributes: Per-leg persistent data (random target sequence,
            killer number)
        id: Unique identifier of the leg
    """
    user_id: str
    type: GameType
    visits: list[Visit] = field(default_factory=list)
    finish: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=_new_id)


@dataclass
class Game:
    """
    A full match.

    Attributes:
        type: Game variant
        attributes: Variant options (start_score, finish, mode, random, fast)
        legs: One leg per participating user, in turn order
        result: User ids in finishing order, empty until the game is saved
        id: Unique identifier; engines are cached against it
    """
    type: GameType
    attributes: dict[str, Any] = field(default_factory=dict)
    legs: list[Leg] = field(default_factory=list)
    result: list[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


def get_type_attribute(record: Game | Leg, key: str, default: Any = None) -> Any:
    """Read a variant option from a game or leg, falling back to default."""
    return record.attributes.get(key, default)


def get_leg_of_user(game: Game, user_id: str) -> Leg | None:
    """The leg thrown by user_id in this game, if any."""
    for leg in game.legs:
        if leg.user_id == user_id:
            return leg
    return None


def get_visits_of_user(game: Game, user_id: str) -> list[Visit]:
    """All visits thrown by user_id so far (empty if not playing)."""
    leg = get_leg_of_user(game, user_id)
    return leg.visits if leg else []


@dataclass(frozen=True)
class PlayerProgress:
    """
    Derived per-player summary.

    Attributes:
        user_id: Player identity
        points: Remaining score (X01), targets left (Round the Clock)
            or lives (Killer)
        finished: Leg completed (or player eliminated in Killer)
        target: Next target (Round the Clock) or private number (Killer)
        is_killer: Killer only, whether the player may take lives
    """
    user_id: str
    points: int
    finished: bool = False
    target: int | None = None
    is_killer: bool = False


@dataclass(frozen=True)
class GameState:
    """
    Turn and progress snapshot derived from a game's history.

    Attributes:
        user_id: Player to throw next, None once the game is over
        prev_user_id: Player whose visit was completed most recently
        results: User ids in finishing order so far
        players: Progress of every player, in leg order
    """
    user_id: str | None = None
    prev_user_id: str | None = None
    results: tuple[str, ...] = ()
    players: tuple[PlayerProgress, ...] = ()

    @property
    def is_over(self) -> bool:
        """True when nobody is left to throw."""
        return self.user_id is None

    def progress_of(self, user_id: str) -> PlayerProgress | None:
        for player in self.players:
            if player.user_id == user_id:
                return player
        return None


class GameController(ABC):
    """
    Rule engine bound to a single game.

    Derives GameState by replaying every leg's visits in round-robin order,
    skipping finished players. A turn ends once the visit is full or the
    thrower finishes. Subclasses supply the per-variant rules; nothing here
    writes to the game.
    """

    MIN_PLAYERS: ClassVar[int] = 1

    def __init__(self, game: Game) -> None:
        self.game = game

    @abstractmethod
    def initial_progress(self, leg: Leg) -> PlayerProgress:
        """Progress of a player before their first dart."""

    @abstractmethod
    def play_visit(
        self,
        leg: Leg,
        visit: Visit,
        progress: dict[str, PlayerProgress],
    ) -> list[str]:
        """
        Apply one visit to the working progress table.

        Args:
            leg: Leg the visit belongs to
            visit: The visit being replayed
            progress: Working progress keyed by user id, updated in place

        Returns:
            User ids that finished during this visit, in order
        """

    def final_results(self, results: list[str], remaining: list[str]) -> list[str]:
        """Results once the game is over; remaining holds unfinished players."""
        return results

    def get_game_state(self) -> GameState:
        """Recompute the game state from the full throw history."""
        legs = self.game.legs
        if not legs:
            return GameState()

        progress = {leg.user_id: self.initial_progress(leg) for leg in legs}
        cursors = {leg.user_id: 0 for leg in legs}
        results: list[str] = []
        prev_user_id: str | None = None
        quorum = min(2, len(legs))
        index = 0

        while True:
            remaining = [leg.user_id for leg in legs if not progress[leg.user_id].finished]
            if len(remaining) < quorum:
                return GameState(
                    user_id=None,
                    prev_user_id=prev_user_id,
                    results=tuple(self.final_results(results, remaining)),
                    players=self._players(progress),
                )

            leg = legs[index % len(legs)]
            if progress[leg.user_id].finished:
                index += 1
                continue

            cursor = cursors[leg.user_id]
            if cursor >= len(leg.visits):
                return self._state(leg.user_id, prev_user_id, results, progress)

            visit = leg.visits[cursor]
            cursors[leg.user_id] = cursor + 1
            results.extend(self.play_visit(leg, visit, progress))

            if (
                visit_is_full(visit)
                or progress[leg.user_id].finished
                or self._unfinished_count(progress) < quorum
            ):
                prev_user_id = leg.user_id
                index += 1
                continue

            # Partial visit: the player is still at the board.
            return self._state(leg.user_id, prev_user_id, results, progress)

    def _state(
        self,
        user_id: str,
        prev_user_id: str | None,
        results: list[str],
        progress: dict[str, PlayerProgress],
    ) -> GameState:
        return GameState(
            user_id=user_id,
            prev_user_id=prev_user_id,
            results=tuple(results),
            players=self._players(progress),
        )

    def _players(self, progress: dict[str, PlayerProgress]) -> tuple[PlayerProgress, ...]:
        return tuple(progress[leg.user_id] for leg in self.game.legs)

    @staticmethod
    def _unfinished_count(progress: dict[str, PlayerProgress]) -> int:
        return sum(1 for player in progress.values() if not player.finished)
