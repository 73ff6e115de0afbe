"""
Snips Player Configuration Package

Modular configuration split by component:
- mpd: MPD connection and player settings
- system: logging and threading settings
- environment: .env / environment variable loader for host scripts

You can import specific modules:
    from snipsplayer.config import mpd, system
    print(mpd.HOST, system.LOG_LEVEL)

Or use the flat names:
    from snipsplayer import config
    print(config.MPD_HOST, config.LOG_LEVEL)
"""

import sys

from . import mpd
from . import system

# =============================================================================
# Flat Exports
# =============================================================================

# MPD Configuration
MPD_HOST = mpd.HOST
MPD_PORT = mpd.PORT
MPD_PASSWORD = mpd.PASSWORD
MPD_TIMEOUT = mpd.TIMEOUT
MPD_DEFAULT_VOLUME = mpd.DEFAULT_VOLUME
MPD_SILENCE_VOLUME = mpd.SILENCE_VOLUME
MPD_ENABLE_RANDOM = mpd.ENABLE_RANDOM
MPD_PLAYLIST_SUFFIX = mpd.PLAYLIST_SUFFIX

# System Configuration
LOG_LEVEL = system.LOG_LEVEL
LOG_FORMAT = system.LOG_FORMAT
CONNECT_JOIN_TIMEOUT = system.CONNECT_JOIN_TIMEOUT


def get_config_dict() -> dict:
    """
    Get all configuration as a dictionary.

    Returns:
        Dictionary of all configuration values
    """
    module = sys.modules[__name__]
    return {key: getattr(module, key) for key in dir(module) if key.isupper()}


def print_config():
    """Print all configuration values."""
    config = get_config_dict()

    print("=" * 80)
    print("Snips Player Configuration")
    print("=" * 80)

    current_section = None
    for key, value in sorted(config.items()):
        # Detect section changes based on prefix
        section = key.split('_')[0]
        if section != current_section:
            print(f"\n{section} Configuration:")
            print("-" * 40)
            current_section = section

        print(f"  {key}: {value}")

    print("=" * 80)
