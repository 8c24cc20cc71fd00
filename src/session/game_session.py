"""
Oche - Game Session

Owns the match being scored. Records and undoes darts, keeps the rule engine
bound to the active game, recomputes the derived state after every change,
stages walk-on announcements and persists the game: locally after every
throw, remotely once the match is finalized.
"""

from __future__ import annotations

import logging

from src.config.settings import Settings, get_settings
from src.database.client import get_supabase_client
from src.database.games import GameManager
from src.database.legs import LegManager
from src.database.models import UserProfile
from src.database.stats import StatsManager
from src.database.users import UserManager
from src.engine.base import (
    Game,
    GameController,
    GameState,
    Leg,
    Segment,
    Visit,
    get_leg_of_user,
    get_visits_of_user,
    new_visit,
    visit_is_full,
)
from src.engine.games import get_game_controller, get_min_player_count
from src.engine.validators import validate_segment, validate_visit
from src.session.errors import (
    InvalidGameError,
    NoActiveGameError,
    NoCurrentPlayerError,
    PlayerFinishedError,
    SessionError,
)
from src.session.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class GameSession:
    """Scoring session for a single active game.

    The session is the only writer of throw history. Rule engines only read
    the game; the GameState is rebuilt from scratch after every mutation.
    """

    def __init__(
        self,
        *,
        users: UserManager | None = None,
        legs: LegManager | None = None,
        games: GameManager | None = None,
        stats: StatsManager | None = None,
        snapshots: SnapshotStore | None = None,
    ) -> None:
        self._users = users
        self._legs = legs
        self._games = games
        self._stats = stats
        self._snapshots = snapshots

        self.game: Game | None = None
        self.game_state: GameState | None = None

        self.walk_on: str | None = None
        self.walk_on_time: int = 0

        # Don't access the controller directly, use get_controller()
        self._controller: GameController | None = None
        self._controller_game_id: str | None = None
        self._profiles: dict[str, UserProfile | None] = {}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GameSession:
        """Session wired to Supabase and the configured snapshot file."""
        settings = settings or get_settings()
        client = get_supabase_client()
        return cls(
            users=UserManager(client),
            legs=LegManager(client),
            games=GameManager(client),
            stats=StatsManager(client),
            snapshots=SnapshotStore(settings.snapshot_path),
        )

    # -- Game lifecycle --------------------------------------------------

    def set_active_game(self, game: Game) -> GameState:
        """Install a game for scoring.

        Raises:
            InvalidGameError: If the game has no legs, fewer players than
                its variant needs, or malformed visits.
        """
        if not game.legs:
            raise InvalidGameError("A game needs at least one leg.")
        minimum = get_min_player_count(game.type)
        if len(game.legs) < minimum:
            raise InvalidGameError(
                f"{game.type.value} needs at least {minimum} players, got {len(game.legs)}."
            )
        for leg in game.legs:
            self._check_visits(leg)
        try:
            controller = get_game_controller(game)
            controller.get_game_state()
        except ValueError as exc:
            raise InvalidGameError(str(exc)) from exc

        # A reloaded snapshot keeps its id but is a new object, so rebind here.
        self.game = game
        self._controller = controller
        self._controller_game_id = game.id
        logger.info("Active game %s (%s, %d legs)", game.id, game.type.value, len(game.legs))
        return self.update_game_state()

    def restore(self) -> GameState | None:
        """Resume the match stored in the local snapshot, if any."""
        if self._snapshots is None:
            return None
        game = self._snapshots.load()
        if game is None:
            return None
        logger.info("Restoring game %s from snapshot", game.id)
        return self.set_active_game(game)

    def clear(self) -> None:
        """Drop the active game and its local snapshot."""
        self.game = None
        self.game_state = None
        self.walk_on = None
        self.walk_on_time = 0
        if self._snapshots is not None:
            self._snapshots.clear()

    def get_controller(self) -> GameController:
        """Rule engine for the active game, rebuilt when the game changes."""
        if self.game is None:
            raise NoActiveGameError("No active game.")
        if self._controller is None or self._controller_game_id != self.game.id:
            self._controller = get_game_controller(self.game)
            self._controller_game_id = self.game.id
        return self._controller

    def update_game_state(self) -> GameState:
        """Recompute the game state and stage the current player's walk-on."""
        self.game_state = self.get_controller().get_game_state()

        self.walk_on = None
        self.walk_on_time = 0
        user_id = self.game_state.user_id
        if self.game and user_id and len(get_visits_of_user(self.game, user_id)) <= 1:
            profile = self._get_profile(user_id)
            if profile:
                self.walk_on = profile.walk_on
                self.walk_on_time = profile.walk_on_time

        return self.game_state

    # -- Scoring ---------------------------------------------------------

    def record_throw(self, segment: Segment) -> GameState:
        """Record the next dart of the current player.

        Raises:
            NoActiveGameError: If no game is installed
            NoCurrentPlayerError: If the game is over or the player has no leg
            PlayerFinishedError: If the current player already finished
        """
        validate_segment(segment)
        if self.game is None:
            raise NoActiveGameError("No active game.")
        state = self.update_game_state()
        if not state.user_id:
            raise NoCurrentPlayerError("No current user, the game is over.")
        if state.user_id in state.results:
            raise PlayerFinishedError(f"User {state.user_id} has already finished.")
        leg = get_leg_of_user(self.game, state.user_id)
        if leg is None:
            raise NoCurrentPlayerError(f"No leg for user {state.user_id}.")

        if not leg.visits or visit_is_full(leg.visits[-1]):
            leg.visits.append(new_visit())
        visit = leg.visits[-1]
        visit[visit.index(None)] = segment
        logger.debug("User %s threw %s", leg.user_id, segment)

        state = self.update_game_state()
        self.save_to_local_storage()
        return state

    def undo_throw(self) -> GameState:
        """Remove the most recent dart, reaching back into the previous turn.

        Does nothing at the start of a match.
        """
        if self.game is None:
            raise NoActiveGameError("No active game.")
        state = self.game_state or self.update_game_state()

        user_id = state.user_id
        visit = self.current_visit
        if visit is None or visit_is_full(visit):
            user_id = state.prev_user_id
        if not user_id:
            return state

        leg = get_leg_of_user(self.game, user_id)
        if leg is None or not leg.visits:
            return state
        visit = leg.visits[-1]

        for i in reversed(range(len(visit))):
            if visit[i] is not None:
                logger.debug("Undo %s from user %s", visit[i], user_id)
                visit[i] = None
                break
        if visit[0] is None:
            leg.visits.pop()

        state = self.update_game_state()
        self.save_to_local_storage()
        return state

    def finalize_match(self) -> GameState:
        """Store the results and every leg remotely, then refresh statistics.

        Remote failures are raised to the caller; the in-memory game is kept
        as it is so the save can be retried.
        """
        if self.game is None:
            raise NoActiveGameError("No active game.")
        if self._legs is None or self._games is None:
            raise SessionError("No remote persistence configured.")

        state = self.update_game_state()
        self.game.result = list(state.results)
        for leg in self.game.legs:
            if leg.user_id in self.game.result:
                leg.finish = True

        try:
            for leg in self.game.legs:
                self._legs.insert(leg)
            self._games.insert(self.game)
        except Exception:
            logger.exception("Saving game %s failed", self.game.id)
            raise
        logger.info("Game %s saved with result %s", self.game.id, self.game.result)

        if self._stats is not None:
            self._stats.refresh()
        return state

    def save_to_local_storage(self) -> None:
        """Overwrite the local recovery snapshot with the active game."""
        if self._snapshots is None or self.game is None:
            return
        self._snapshots.save(self.game)

    # -- Views -----------------------------------------------------------

    @property
    def current_leg(self) -> Leg | None:
        """Leg of the player to throw next."""
        if self.game is None or self.game_state is None or not self.game_state.user_id:
            return None
        return get_leg_of_user(self.game, self.game_state.user_id)

    @property
    def current_visit(self) -> Visit | None:
        """Last visit of the current player, which may already be full."""
        leg = self.current_leg
        if leg is None or not leg.visits:
            return None
        return leg.visits[-1]

    @property
    def number_of_throws(self) -> int | None:
        """Darts already thrown in the current player's open visit."""
        visit = self.current_visit
        if visit is None:
            return None
        return sum(1 for slot in visit if slot is not None)

    # -- Internals -------------------------------------------------------

    def _get_profile(self, user_id: str) -> UserProfile | None:
        if self._users is None:
            return None
        if user_id not in self._profiles:
            self._profiles[user_id] = self._users.get(user_id)
        return self._profiles[user_id]

    @staticmethod
    def _check_visits(leg: Leg) -> None:
        for i, visit in enumerate(leg.visits):
            try:
                validate_visit(visit)
            except ValueError as exc:
                raise InvalidGameError(f"Leg {leg.id}: {exc}") from exc
            if i < len(leg.visits) - 1 and not visit_is_full(visit):
                raise InvalidGameError(f"Leg {leg.id}: visit {i} is partial but not the last.")
