"""
Player Errors - Fatal connection conditions raised by the MPD player

Expected outcomes such as "nothing playing" or "not found" are reported as
PlayerResult failures. Only conditions that end the current MPD connection
are raised.
"""

from .player_model import PlayerError


class PlayerConnectionError(Exception):
    """Base class for fatal MPD connection conditions."""

    kind: PlayerError = PlayerError.MPD_CONNECTION_FAILED

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value


class MPDConnectionFailed(PlayerConnectionError):
    """Transport-level socket error, or a command issued without a connection."""

    kind = PlayerError.MPD_CONNECTION_FAILED


class MPDConnectionEnd(PlayerConnectionError):
    """The MPD server closed the connection."""

    kind = PlayerError.MPD_CONNECTION_END
