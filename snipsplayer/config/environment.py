"""
Environment configuration loader for Snips Player host scripts

Loads an optional .env file into the process environment and maps the MPD
variables onto PlayerOptions. The player adapter itself never reads the
environment; hosts call options_from_env() and pass the result in.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from . import mpd, system
from ..player_model import PlayerOptions

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on')


def load_env_file(env_file: Union[str, Path]) -> int:
    """
    Load environment variables from a .env file.

    Variables already present in the environment are kept.

    Args:
        env_file: Path to the .env file

    Returns:
        Number of variables set
    """
    env_file = Path(env_file)
    if not env_file.exists():
        logger.debug(f".env file not found at {env_file}")
        return 0

    loaded = 0
    with open(env_file, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            # Skip comments and empty lines
            if line.startswith('#') or not line or '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = os.path.expandvars(value.strip().strip('"').strip("'"))

            if key not in os.environ:
                os.environ[key] = value
                loaded += 1

    logger.debug(f"Loaded {loaded} variables from {env_file}")
    return loaded


def _get_int(name: str) -> Optional[int]:
    value = os.getenv(name, '')
    return int(value) if value else None


def _get_bool(name: str) -> Optional[bool]:
    value = os.getenv(name, '')
    return value.lower() in TRUE_VALUES if value else None


def options_from_env(env_file: Union[str, Path, None] = None) -> PlayerOptions:
    """
    Build PlayerOptions from MPD_* environment variables.

    Unset variables stay None so the configured defaults apply.

    Args:
        env_file: Optional .env file loaded first

    Returns:
        PlayerOptions instance
    """
    if env_file is not None:
        load_env_file(env_file)

    return PlayerOptions(
        host=os.getenv('MPD_HOST') or None,
        port=_get_int('MPD_PORT'),
        default_volume=_get_int('MPD_DEFAULT_VOLUME'),
        enable_random=_get_bool('MPD_ENABLE_RANDOM'),
        password=os.getenv('MPD_PASSWORD') or None,
        timeout=_get_int('MPD_TIMEOUT')
    )


def log_level() -> str:
    """Get log level from LOG_LEVEL, falling back to the configured one."""
    return os.getenv('LOG_LEVEL', system.LOG_LEVEL).upper()


def print_config(options: PlayerOptions):
    """Print the effective connection configuration."""
    print("🔧 Snips Player Configuration:")
    print(f"  🎵 MPD host: {options.resolved_host()}")
    print(f"  🎵 MPD port: {options.resolved_port()}")
    print(f"  🎵 MPD timeout: {options.resolved_timeout()}s")
    volume = options.default_volume if options.default_volume is not None else mpd.DEFAULT_VOLUME
    print(f"  🔊 Default volume: {volume}%")
    print(f"  📝 Log level: {log_level()}")
