"""
Snips Player - MPD music player adapter for voice-assistant skills

Translates intent-level commands (play, pause, load playlist X) into MPD
commands, tracks volume and connection readiness, and reports named
conditions back to the intent handler.
"""

__version__ = "0.2.0"

from .errors import PlayerConnectionError, MPDConnectionFailed, MPDConnectionEnd
from .mpd import SnipsMPDClient
from .player import PlayerAdapter, playlist_filename
from .player_model import (
    ConnectionEvent,
    ConnectionState,
    PlayerError,
    PlayerOptions,
    PlayerResult,
    PlayerSettings,
    SearchCriteria,
)

__all__ = [
    "PlayerAdapter",
    "SnipsMPDClient",
    "PlayerOptions",
    "PlayerSettings",
    "PlayerResult",
    "PlayerError",
    "SearchCriteria",
    "ConnectionEvent",
    "ConnectionState",
    "PlayerConnectionError",
    "MPDConnectionFailed",
    "MPDConnectionEnd",
    "playlist_filename"
]
