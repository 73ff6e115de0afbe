"""
Snips Player - MPD client package

Thread-safe wrapper around python-mpd2 that reports connection lifecycle
events to the player adapter.
"""

from .client import SnipsMPDClient, flatten_filters

__all__ = [
    "SnipsMPDClient",
    "flatten_filters"
]
