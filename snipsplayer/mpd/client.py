"""
Snips MPD Client - Thread-safe MPD client emitting connection lifecycle events
"""

import logging
import threading
from typing import Optional, Callable, Dict, Any, List, Iterable

import mpd

from ..errors import MPDConnectionFailed, MPDConnectionEnd
from ..player_model import ConnectionEvent

logger = logging.getLogger(__name__)


def flatten_filters(filters: Iterable[Iterable[str]]) -> List[str]:
    """Flatten [[tag, value], ...] pairs into python-mpd2 positional arguments."""
    args = []
    for tag, value in filters:
        args.extend([tag, value])
    return args


class SnipsMPDClient:
    """
    Thread-safe MPD client for the Snips music player.

    This client uses threading locks to ensure safe concurrent access from multiple threads:
    - Command lock: Protects all MPD command operations
    - Connection lock: Protects connection state management

    Connection lifecycle is reported through callbacks registered with
    add_callback() for ConnectionEvent.READY, SOCKET_ERROR and SOCKET_END.
    Lifecycle callbacks may raise; their exceptions reach the caller.
    """

    def __init__(self,
                 host: str = 'localhost',
                 port: int = 6600,  # MPD default port
                 password: Optional[str] = None,
                 timeout: int = 10):
        """
        Initialize Snips MPD client.

        Args:
            host: MPD server hostname
            port: MPD server port (default 6600)
            password: MPD password if required
            timeout: Connection timeout in seconds
        """
        self.host = host
        self.port = port
        self.password = password
        self.timeout = timeout
        self._connected = False

        # Lifecycle callbacks keyed by ConnectionEvent
        self.callbacks: Dict[ConnectionEvent, List[Callable]] = {}

        # Thread safety locks
        self._command_lock = threading.RLock()  # Reentrant lock for nested calls
        self._connection_lock = threading.RLock()

        self.client = mpd.MPDClient()
        self.client.timeout = timeout

        logger.info(f"Snips MPD client initialized for {host}:{port}")

    def add_callback(self, event: ConnectionEvent, callback: Callable):
        """
        Add callback for a connection lifecycle event.

        Args:
            event: ConnectionEvent to observe
            callback: Callback function, called with keyword arguments
        """
        if event not in self.callbacks:
            self.callbacks[event] = []
        self.callbacks[event].append(callback)
        logger.debug(f"Added client callback for {event.value}")

    def _trigger_callbacks(self, event: ConnectionEvent, **kwargs):
        """Trigger callbacks for event. Exceptions are not caught."""
        for callback in self.callbacks.get(event, []):
            callback(**kwargs)

    def connect(self):
        """
        Connect to MPD server (thread-safe).

        Triggers READY on success and SOCKET_ERROR on failure.

        Raises:
            MPDConnectionFailed: if the connection could not be opened
        """
        error = None
        with self._connection_lock:
            try:
                logger.info(f"Connecting to MPD at {self.host}:{self.port}")
                self.client.connect(self.host, self.port)

                if self.password:
                    self.client.password(self.password)

                self._connected = True
                logger.info("Connected to MPD successfully")

            except (mpd.ConnectionError, OSError) as e:
                if e.args and isinstance(e.args[0], str) and "Already connected" in e.args[0]:
                    logger.warning("Already connected to MPD")
                    self._connected = True
                else:
                    logger.error(f"Failed to connect to MPD: {e}")
                    self._connected = False
                    error = e

            except mpd.CommandError as e:
                logger.error(f"MPD rejected the password: {e}")
                self._connected = False
                error = e
                try:
                    self.client.disconnect()
                except (mpd.ConnectionError, OSError) as close_error:
                    logger.debug(f"Error disconnecting MPD client: {close_error}")

        # Callbacks run outside the connection lock; READY issues commands
        if self._connected:
            self._trigger_callbacks(ConnectionEvent.READY)
            return

        self._trigger_callbacks(ConnectionEvent.SOCKET_ERROR, error=error)
        raise MPDConnectionFailed(f"Cannot connect to MPD at {self.host}:{self.port}: {error}") from error

    def disconnect(self):
        """Disconnect from MPD server (thread-safe). No lifecycle event is emitted."""
        with self._connection_lock:
            if not self._connected:
                logger.debug("Already disconnected from MPD")
                return

            logger.info("Disconnecting from MPD")
            self._connected = False

            try:
                self.client.close()
            except (mpd.ConnectionError, OSError) as e:
                logger.debug(f"Error closing MPD client: {e}")

            try:
                self.client.disconnect()
            except (mpd.ConnectionError, OSError) as e:
                logger.debug(f"Error disconnecting MPD client: {e}")

            logger.info("Disconnected from MPD successfully")

    def is_connected(self) -> bool:
        """Check if connected to MPD server (thread-safe)."""
        with self._connection_lock:
            return self._connected

    def check_connection_error(self, error: Exception):
        """Mark the connection as lost and report SOCKET_END (thread-safe)."""
        with self._connection_lock:
            logger.warning(f"MPD connection lost: {error}")
            try:
                self.client.disconnect()
            except (mpd.ConnectionError, OSError):
                logger.debug("Already disconnected")
            self._connected = False

        self._trigger_callbacks(ConnectionEvent.SOCKET_END, error=error)

    def _execute(self, command: str, *args) -> Any:
        """
        Run one MPD command under the command lock.

        Raises:
            MPDConnectionFailed: if the client is not connected
            MPDConnectionEnd: if the connection drops during the command
            mpd.CommandError: if MPD rejects the command
        """
        with self._command_lock:
            if not self.is_connected():
                raise MPDConnectionFailed(f"Not connected to MPD, cannot run '{command}'")

            try:
                return getattr(self.client, command)(*args)
            except mpd.CommandError as e:
                logger.error(f"MPD rejected '{command}': {e}")
                raise
            except (mpd.ConnectionError, OSError) as e:
                logger.error(f"Connection error during '{command}': {e}")
                self.check_connection_error(e)
                raise MPDConnectionEnd(f"MPD connection closed during '{command}': {e}") from e

    # Playback control methods
    def play(self, songpos: Optional[int] = None):
        """Start playback from current or specified position (thread-safe)."""
        if songpos is not None:
            return self._execute('play', songpos)
        return self._execute('play')

    def pause(self, state: Optional[bool] = None):
        """Pause or unpause playback (thread-safe). None toggles."""
        if state is None:
            return self._execute('pause')
        return self._execute('pause', 1 if state else 0)

    def stop(self):
        """Stop playback (thread-safe)."""
        return self._execute('stop')

    def next(self):
        """Skip to next track (thread-safe)."""
        return self._execute('next')

    def previous(self):
        """Skip to previous track (thread-safe)."""
        return self._execute('previous')

    # Playback options
    def set_volume(self, volume: int):
        """Set volume (0-100) (thread-safe)."""
        if not 0 <= volume <= 100:
            raise ValueError("Volume must be between 0 and 100")
        return self._execute('setvol', volume)

    def set_random(self, enabled: bool):
        """Enable or disable random playback (thread-safe)."""
        return self._execute('random', 1 if enabled else 0)

    # Status and info
    def get_status(self) -> Dict[str, Any]:
        """Get player status (thread-safe)."""
        status = dict(self._execute('status'))
        logger.debug(f"[MPD] Got status: {status}")
        return status

    def get_current_song(self) -> Dict[str, Any]:
        """Get current song info (thread-safe)."""
        return dict(self._execute('currentsong'))

    # Database
    def search(self, filters: Iterable[Iterable[str]]) -> List[Dict[str, Any]]:
        """Search the database with [[tag, value], ...] filters (thread-safe)."""
        return [dict(song) for song in self._execute('search', *flatten_filters(filters))]

    def search_add(self, filters: Iterable[Iterable[str]]):
        """Search the database and add matches to the current playlist (thread-safe)."""
        return self._execute('searchadd', *flatten_filters(filters))

    # Playlist management
    def clear_playlist(self):
        """Clear the current playlist (thread-safe)."""
        result = self._execute('clear')
        logger.info("🎵 Current playlist cleared")
        return result

    def list_playlist(self, playlist: str) -> List[str]:
        """List the files of a stored playlist (thread-safe)."""
        return list(self._execute('listplaylist', playlist))

    def load_playlist(self, playlist: str):
        """Load a stored playlist into the current playlist (thread-safe)."""
        result = self._execute('load', playlist)
        logger.info(f"🎵 Playlist '{playlist}' loaded")
        return result
