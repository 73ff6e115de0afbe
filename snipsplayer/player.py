"""
Player Adapter - Music player wrapper interfacing intent handlers with MPD

The adapter owns one MPD connection, exposes playback, volume and playlist
operations, and translates MPD query results into PlayerResult outcomes the
intent handler can match on.
"""

import functools
import logging
import threading
from typing import Optional, Callable, Dict, Any, Union

import mpd

from .config import mpd as mpd_config
from .errors import PlayerConnectionError, MPDConnectionFailed, MPDConnectionEnd
from .mpd.client import SnipsMPDClient
from .player_model import (
    ConnectionEvent,
    ConnectionState,
    PlayerError,
    PlayerOptions,
    PlayerResult,
    PlayerSettings,
    SearchCriteria,
)

logger = logging.getLogger(__name__)


def playlist_filename(playlist: str) -> str:
    """Stored playlist file name for a spoken playlist name."""
    return f"{playlist.lower()}{mpd_config.PLAYLIST_SUFFIX}"


class PlayerAdapter:
    """
    Music player wrapper, interfacing intent handler with MPD.

    Construction registers the connection lifecycle observers and starts
    connecting in a background thread; it never blocks on the network.
    Connection failures are reported through the lifecycle observers.
    """

    def __init__(self,
                 dialog: Any,
                 options: Union[PlayerOptions, Dict[str, Any], None] = None,
                 client: Optional[SnipsMPDClient] = None,
                 on_error: Optional[Callable[[PlayerConnectionError], None]] = None):
        """
        Initialize the player and start connecting to MPD.

        Args:
            dialog: Dialog handle of the hosting skill (reporting context only)
            options: PlayerOptions or mapping with host, port, defaultVolume, enableRandom
            client: MPD client to use instead of building one from options
            on_error: Called with the fatal error when the background connection fails
        """
        if not isinstance(options, PlayerOptions):
            options = PlayerOptions.from_dict(options)

        self.dialog = dialog
        self.options = options
        self.host = options.resolved_host()
        self.port = options.resolved_port()
        self.on_error = on_error

        self._settings = PlayerSettings.from_options(options)
        self._state = ConnectionState.DISCONNECTED
        self._state_lock = threading.Lock()
        self._settled = threading.Event()
        self.last_error: Optional[PlayerConnectionError] = None

        if client is None:
            client = SnipsMPDClient(
                host=self.host,
                port=self.port,
                password=options.resolved_password(),
                timeout=options.resolved_timeout()
            )
        self.client = client

        self._event_handlers = {
            ConnectionEvent.READY: self._on_ready,
            ConnectionEvent.SOCKET_ERROR: self._on_socket_error,
            ConnectionEvent.SOCKET_END: self._on_socket_end,
        }
        self._start_monitoring()

        self._set_state(ConnectionState.CONNECTING)
        self.connect_thread = threading.Thread(target=self._connect_worker,
                                               name="mpd-connect", daemon=True)
        self.connect_thread.start()

    # Connection lifecycle
    def _start_monitoring(self):
        """Register one observer per lifecycle event on the MPD client."""
        for event in self._event_handlers:
            self.client.add_callback(event, functools.partial(self.handle_event, event))

    def _connect_worker(self):
        try:
            self.client.connect()
        except PlayerConnectionError as e:
            self._report_connect_error(e)
        except Exception as e:
            logger.error(f"Unexpected error while connecting to MPD: {e}", exc_info=True)
            self._set_state(ConnectionState.DISCONNECTED)
            error = MPDConnectionFailed(f"MPD connection to {self.host}:{self.port} failed: {e}")
            error.__cause__ = e
            self._report_connect_error(error)
        finally:
            self._settled.set()

    def _report_connect_error(self, error: PlayerConnectionError):
        self.last_error = error
        if self.on_error:
            self.on_error(error)
        else:
            logger.error(f"MPD connection to {self.host}:{self.port} failed: {error}")

    def handle_event(self, event: ConnectionEvent, error: Optional[Exception] = None):
        """
        Dispatch a connection lifecycle event.

        Args:
            event: The lifecycle event
            error: Underlying socket error for SOCKET_ERROR / SOCKET_END

        Raises:
            MPDConnectionFailed: on SOCKET_ERROR
            MPDConnectionEnd: on SOCKET_END
        """
        logger.debug(f"MPD lifecycle event: {event.value}")
        return self._event_handlers[event](error)

    def _on_ready(self, error: Optional[Exception] = None):
        self._set_state(ConnectionState.READY)
        self._apply_baseline("volume", self.set_volume_to_normal)
        self._apply_baseline("random", self.client.set_random, self.enable_random)
        self._apply_baseline("stop", self.stop)
        self._settled.set()
        logger.info("MPD client is ready to use")

    def _apply_baseline(self, name: str, command: Callable, *args):
        """Run one ready-time command; MPD rejecting it does not skip the others."""
        try:
            command(*args)
        except (mpd.CommandError, ValueError) as e:
            logger.warning(f"Could not apply {name} on ready: {e}")

    def _on_socket_error(self, error: Optional[Exception] = None):
        self._set_state(ConnectionState.DISCONNECTED)
        self._settled.set()
        raise MPDConnectionFailed(f"MPD connection to {self.host}:{self.port} failed: {error}")

    def _on_socket_end(self, error: Optional[Exception] = None):
        self._set_state(ConnectionState.DISCONNECTED)
        raise MPDConnectionEnd(f"MPD connection to {self.host}:{self.port} closed: {error}")

    def _set_state(self, state: ConnectionState):
        with self._state_lock:
            if self._state != state:
                logger.debug(f"Player state: {self._state.value} → {state.value}")
            self._state = state

    @property
    def state(self) -> ConnectionState:
        with self._state_lock:
            return self._state

    @property
    def is_ready(self) -> bool:
        return self.state is ConnectionState.READY

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the first connection attempt has settled.

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            True if the player is ready
        """
        self._settled.wait(timeout)
        return self.is_ready

    def disconnect(self):
        """Close the MPD connection without signalling a fatal condition."""
        self.client.disconnect()
        self._set_state(ConnectionState.DISCONNECTED)

    # Player controlling commands
    def previous(self):
        return self.client.previous()

    def next(self):
        return self.client.next()

    def play(self):
        return self.client.play()

    def pause(self):
        return self.client.pause(True)

    def stop(self):
        return self.client.stop()

    def clear(self):
        return self.client.clear_playlist()

    def get_playing_info(self) -> PlayerResult:
        """
        Get the current playing info.

        Returns:
            Success with the current song dict, or NOTHING_PLAYING when MPD
            is stopped or paused
        """
        status = self.client.get_status()
        state = status.get('state')
        if state in ('stop', 'pause'):
            return PlayerResult.failure(PlayerError.NOTHING_PLAYING, state=state)
        return PlayerResult.success(self.client.get_current_song())

    # Volume
    @property
    def settings(self) -> PlayerSettings:
        with self._state_lock:
            return self._settings.copy()

    @property
    def volume(self) -> int:
        with self._state_lock:
            return self._settings.volume

    @property
    def volume_silence(self) -> int:
        with self._state_lock:
            return self._settings.silence_volume

    @property
    def enable_random(self) -> bool:
        with self._state_lock:
            return self._settings.enable_random

    @staticmethod
    def _check_volume(volume: int):
        if not 0 <= volume <= 100:
            logger.warning(f"Rejected volume level {volume}")
            raise ValueError("Volume must be between 0 and 100")

    def save_volume(self, volume: int):
        """
        Set volume to a given level and keep it as the normal level.

        Args:
            volume: Volume level (0-100)
        """
        self._check_volume(volume)
        with self._state_lock:
            self._settings.volume = volume
        return self.client.set_volume(volume)

    def save_silence_volume(self, volume: int):
        """Keep a new ducking level; it is applied by set_volume_to_silence()."""
        self._check_volume(volume)
        with self._state_lock:
            self._settings.silence_volume = volume

    def set_volume_to_silence(self):
        """Set the volume to silence level."""
        return self.client.set_volume(self.volume_silence)

    def set_volume_to_normal(self):
        """Set the volume back to normal level."""
        return self.client.set_volume(self.volume)

    def set_random(self, enabled: bool):
        """Keep and apply the random playback flag."""
        with self._state_lock:
            self._settings.enable_random = bool(enabled)
        return self.client.set_random(enabled)

    # Interfacing to 'playMusic' intent
    def create_playlist_if_possible(self,
                                    song: Optional[str] = None,
                                    album: Optional[str] = None,
                                    artist: Optional[str] = None) -> PlayerResult:
        """
        Check if the criteria match any song. If yes, clear the current
        playlist and fill it with the matches.

        Args:
            song: Title to search for
            album: Album to search for
            artist: Artist to search for

        Returns:
            Success with the matching songs, or NOT_FOUND
        """
        criteria = SearchCriteria.from_values(song, album, artist)
        if criteria.is_blank():
            logger.warning("Refusing to build a playlist from blank search criteria")
            return PlayerResult.failure(PlayerError.NOT_FOUND, reason="blank criteria")

        filters = criteria.to_filters()
        found = self.client.search(filters)
        if not found:
            logger.debug(f"No songs found for {filters}")
            return PlayerResult.failure(PlayerError.NOT_FOUND)

        self.clear()
        self.client.search_add(filters)
        logger.info(f"🎵 Playlist created with {len(found)} songs")
        return PlayerResult.success(found)

    def load_playlist_if_possible(self, playlist: str) -> PlayerResult:
        """
        Check if the stored playlist exists. If yes, clear the current
        playlist and load the stored one.

        Args:
            playlist: Spoken playlist name

        Returns:
            Success with the playlist entries, or NOT_FOUND
        """
        filename = playlist_filename(playlist)
        try:
            entries = self.client.list_playlist(filename)
            if not entries:
                logger.debug(f"Playlist '{filename}' is empty: {entries}")
                return PlayerResult.failure(PlayerError.NOT_FOUND, playlist=filename)
            self.clear()
        except mpd.CommandError as e:
            logger.debug(f"Playlist '{filename}' did not pass checking: {e}")
            return PlayerResult.failure(PlayerError.NOT_FOUND, playlist=filename)

        self.client.load_playlist(filename)
        return PlayerResult.success(entries)
