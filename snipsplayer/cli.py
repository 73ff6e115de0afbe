#!/usr/bin/env python3
"""
Snips Player CLI

Command-line interface driving the player adapter against an MPD server.
Provides commands for play, pause, stop, next, previous, volume and playlists.
"""

import argparse
import json
import logging
import sys
from typing import Optional

import mpd

from . import config
from .config.environment import options_from_env, log_level
from .errors import PlayerConnectionError
from .player import PlayerAdapter
from .player_model import PlayerResult

logger = logging.getLogger(__name__)


class PlayerCLI:
    """Command-line interface for the player adapter."""

    def __init__(self, player: PlayerAdapter, wait: float = config.CONNECT_JOIN_TIMEOUT):
        """
        Initialize the CLI.

        Args:
            player: Player adapter to drive
            wait: Seconds to wait for the MPD connection
        """
        self.player = player
        self.wait = wait

    def check_connection(self) -> bool:
        """Check if the player reached the ready state."""
        if not self.player.wait_until_ready(self.wait):
            print(f"Error: Cannot connect to MPD at {self.player.host}:{self.player.port}")
            if self.player.last_error:
                print(f"Reason: {self.player.last_error.kind.value}")
            return False
        return True

    def _report(self, result: PlayerResult, message: str, as_json: bool = False) -> int:
        if not result.ok:
            print(result.error.value)
            return 1
        if as_json:
            print(json.dumps(result.value, indent=2))
        else:
            print(message)
        return 0

    def cmd_play(self, args) -> int:
        """Start playback."""
        self.player.play()
        print("Playback started")
        return 0

    def cmd_pause(self, args) -> int:
        """Pause playback."""
        self.player.pause()
        print("Playback paused")
        return 0

    def cmd_stop(self, args) -> int:
        """Stop playback."""
        self.player.stop()
        print("Playback stopped")
        return 0

    def cmd_next(self, args) -> int:
        """Skip to next track."""
        self.player.next()
        print("Skipped to next track")
        return 0

    def cmd_previous(self, args) -> int:
        """Skip to previous track."""
        self.player.previous()
        print("Skipped to previous track")
        return 0

    def cmd_clear(self, args) -> int:
        """Clear the current playlist."""
        self.player.clear()
        print("Current playlist cleared")
        return 0

    def cmd_current(self, args) -> int:
        """Show current song information."""
        result = self.player.get_playing_info()
        if not result.ok or args.json:
            return self._report(result, "", as_json=True)

        song = result.value
        print("=== Current Song ===")
        for field in ('title', 'artist', 'album', 'file'):
            if field in song:
                print(f"{field.title()}: {song[field]}")
        return 0

    def cmd_volume(self, args) -> int:
        """Save a new normal volume."""
        try:
            self.player.save_volume(args.level)
        except ValueError:
            print("Invalid volume level. Must be a number between 0 and 100.")
            return 1
        print(f"Volume set to {args.level}%")
        return 0

    def cmd_silence(self, args) -> int:
        """Duck the volume to the silence level."""
        self.player.set_volume_to_silence()
        print(f"Volume set to {self.player.volume_silence}%")
        return 0

    def cmd_normal(self, args) -> int:
        """Restore the normal volume."""
        self.player.set_volume_to_normal()
        print(f"Volume set to {self.player.volume}%")
        return 0

    def cmd_search(self, args) -> int:
        """Replace the current playlist with songs matching the criteria."""
        result = self.player.create_playlist_if_possible(args.title, args.album, args.artist)
        count = len(result.value) if result.ok else 0
        return self._report(result, f"Playlist created with {count} songs", as_json=args.json)

    def cmd_playlist(self, args) -> int:
        """Replace the current playlist with a stored playlist."""
        result = self.player.load_playlist_if_possible(args.name)
        return self._report(result, f"Playlist '{args.name}' loaded", as_json=args.json)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Control an MPD server through the Snips player adapter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s play                          # Start playback
  %(prog)s volume 60                     # Save and apply volume 60%%
  %(prog)s search --artist "Miles Davis" # Play everything by an artist
  %(prog)s playlist "My Mix"             # Load my mix.m3u
  %(prog)s --host 192.168.1.100 current  # Query a remote server
        """
    )

    parser.add_argument("--host", default=None,
                        help=f"MPD server hostname (default: $MPD_HOST or {config.MPD_HOST})")
    parser.add_argument("--port", type=int, default=None,
                        help=f"MPD server port (default: $MPD_PORT or {config.MPD_PORT})")
    parser.add_argument("--env-file", default=".env",
                        help="Environment file to load (default: .env)")
    parser.add_argument("--wait", type=float, default=config.CONNECT_JOIN_TIMEOUT,
                        help="Seconds to wait for the MPD connection")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("play", help="Start playback")
    subparsers.add_parser("pause", help="Pause playback")
    subparsers.add_parser("stop", help="Stop playback")
    subparsers.add_parser("next", help="Skip to next track")
    subparsers.add_parser("previous", help="Skip to previous track")
    subparsers.add_parser("clear", help="Clear the current playlist")

    current_parser = subparsers.add_parser("current", help="Show current song information")
    current_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    volume_parser = subparsers.add_parser("volume", help="Save and apply the normal volume")
    volume_parser.add_argument("level", type=int, help="Volume level (0-100)")

    subparsers.add_parser("silence", help="Duck the volume to the silence level")
    subparsers.add_parser("normal", help="Restore the normal volume")

    search_parser = subparsers.add_parser("search", help="Build the playlist from a search")
    search_parser.add_argument("--title", help="Song title")
    search_parser.add_argument("--album", help="Album name")
    search_parser.add_argument("--artist", help="Artist name")
    search_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    playlist_parser = subparsers.add_parser("playlist", help="Load a stored playlist")
    playlist_parser.add_argument("name", help="Playlist name")
    playlist_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    return parser


def main(argv: Optional[list] = None, player: Optional[PlayerAdapter] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    options = options_from_env(args.env_file)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, log_level(), logging.INFO),
        format=config.LOG_FORMAT
    )

    if args.host:
        options.host = args.host
    if args.port:
        options.port = args.port

    if player is None:
        player = PlayerAdapter(dialog=None, options=options, on_error=lambda e: logger.debug(f"Connection failed: {e}"))
    cli = PlayerCLI(player, wait=args.wait)

    # Map commands to methods
    commands = {
        "play": cli.cmd_play,
        "pause": cli.cmd_pause,
        "stop": cli.cmd_stop,
        "next": cli.cmd_next,
        "previous": cli.cmd_previous,
        "clear": cli.cmd_clear,
        "current": cli.cmd_current,
        "volume": cli.cmd_volume,
        "silence": cli.cmd_silence,
        "normal": cli.cmd_normal,
        "search": cli.cmd_search,
        "playlist": cli.cmd_playlist,
    }

    try:
        if not cli.check_connection():
            return 1
        return commands[args.command](args)
    except PlayerConnectionError as e:
        print(e.kind.value)
        return 1
    except mpd.CommandError as e:
        print(f"MPD error: {e}")
        return 1
    finally:
        player.disconnect()


if __name__ == "__main__":
    sys.exit(main())
