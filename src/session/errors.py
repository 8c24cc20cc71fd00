"""
Oche - Session Errors

Raised when the scoring session is driven in a way the UI should prevent.
The session state is left untouched whenever one of these is raised.
"""


class SessionError(RuntimeError):
    """Base class for misuse of the scoring session."""


class NoActiveGameError(SessionError):
    """No game has been installed in the session."""


class InvalidGameError(SessionError):
    """The game cannot be played (no legs, too few players, bad history)."""


class NoCurrentPlayerError(SessionError):
    """Nobody is left to throw, or the current player has no leg."""


class PlayerFinishedError(SessionError):
    """The current player already finished the game."""
