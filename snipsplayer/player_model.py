"""
Player Model - Data models shared by the MPD client and the player adapter

This module defines the connection lifecycle (states and events), the player
options and settings, search criteria for the MPD database, and the result
type returned by operations that can end in an expected, named condition.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Optional, Dict, Any, List

from .config import mpd as mpd_config


class ConnectionState(Enum):
    """Connection lifecycle of the player"""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"


class ConnectionEvent(Enum):
    """Lifecycle events emitted by the MPD client"""
    READY = "ready"
    SOCKET_ERROR = "socket-error"
    SOCKET_END = "socket-end"


class PlayerError(Enum):
    """Named conditions surfaced to the intent handler"""
    NOTHING_PLAYING = "nothingPlaying"
    NOT_FOUND = "notFound"
    MPD_CONNECTION_FAILED = "mpdConnectionFailed"
    MPD_CONNECTION_END = "mpdConnectionEnd"


@dataclass
class PlayerOptions:
    """
    Construction overrides for the player.

    Any field left as None falls back to the configured default.
    """
    host: Optional[str] = None
    port: Optional[int] = None
    default_volume: Optional[int] = None
    enable_random: Optional[bool] = None
    password: Optional[str] = None
    timeout: Optional[int] = None

    # camelCase keys used by skill configuration files
    _ALIASES = {
        'defaultVolume': 'default_volume',
        'enableRandom': 'enable_random',
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerOptions':
        """
        Build options from a plain mapping.

        Args:
            data: Mapping with snake_case or camelCase keys; unknown keys are ignored

        Returns:
            PlayerOptions instance
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = cls._ALIASES.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)

    def resolved_host(self) -> str:
        return self.host if self.host is not None else mpd_config.HOST

    def resolved_port(self) -> int:
        return int(self.port) if self.port is not None else mpd_config.PORT

    def resolved_password(self) -> Optional[str]:
        return self.password if self.password is not None else mpd_config.PASSWORD

    def resolved_timeout(self) -> int:
        return int(self.timeout) if self.timeout is not None else mpd_config.TIMEOUT


@dataclass
class PlayerSettings:
    """
    Mutable player settings.

    Volumes are 0-100. The silence level is used to duck audio while the
    assistant is listening.
    """
    volume: int = mpd_config.DEFAULT_VOLUME
    silence_volume: int = mpd_config.SILENCE_VOLUME
    enable_random: bool = mpd_config.ENABLE_RANDOM

    @classmethod
    def from_options(cls, options: PlayerOptions) -> 'PlayerSettings':
        settings = cls()
        if options.default_volume is not None:
            settings.volume = int(options.default_volume)
        if options.enable_random is not None:
            settings.enable_random = bool(options.enable_random)
        return settings

    def copy(self) -> 'PlayerSettings':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'volume': self.volume,
            'silence_volume': self.silence_volume,
            'enable_random': self.enable_random
        }


@dataclass
class SearchCriteria:
    """Title/album/artist filter for the MPD database. Missing values are blank."""
    title: str = ""
    album: str = ""
    artist: str = ""

    @classmethod
    def from_values(cls, title: Optional[str] = None, album: Optional[str] = None,
                    artist: Optional[str] = None) -> 'SearchCriteria':
        return cls(title=title or "", album=album or "", artist=artist or "")

    def is_blank(self) -> bool:
        return not (self.title or self.album or self.artist)

    def to_filters(self) -> List[List[str]]:
        """
        Get the criteria as MPD field/value pairs.

        Returns:
            [["Title", ...], ["Album", ...], ["Artist", ...]]
        """
        return [
            ["Title", self.title],
            ["Album", self.album],
            ["Artist", self.artist]
        ]


@dataclass
class PlayerResult:
    """
    Outcome of a player operation that can fail with a named condition.

    Either `value` holds the MPD data or `error` names the condition.
    """
    value: Any = None
    error: Optional[PlayerError] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> 'PlayerResult':
        return cls(value=value)

    @classmethod
    def failure(cls, error: PlayerError, **details) -> 'PlayerResult':
        return cls(error=error, details=details)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'ok': self.ok,
            'value': self.value,
            'error': self.error.value if self.error else None,
            'details': self.details
        }
