"""
MPD (Music Player Daemon) Configuration
"""

# =============================================================================
# MPD Server Connection
# =============================================================================
HOST = 'localhost'
PORT = 6600  # MPD default port
PASSWORD = None
TIMEOUT = 10  # seconds

# =============================================================================
# Player Settings
# =============================================================================
DEFAULT_VOLUME = 80  # 0-100 - normal listening level
SILENCE_VOLUME = 20  # 0-100 - ducked level while the assistant is listening
ENABLE_RANDOM = True  # shuffle the current playlist

# =============================================================================
# Stored Playlists
# =============================================================================
PLAYLIST_SUFFIX = '.m3u'  # appended to lowercased playlist names
