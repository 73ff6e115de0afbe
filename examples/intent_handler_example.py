#!/usr/bin/env python3
"""
Intent handler example for the Snips player adapter

Shows how a skill maps named player conditions to spoken answers.
"""

import logging
import sys

from snipsplayer import PlayerAdapter, PlayerError, PlayerConnectionError

ANSWERS = {
    PlayerError.NOTHING_PLAYING: "Nothing is playing right now.",
    PlayerError.NOT_FOUND: "Sorry, I could not find that.",
}


def answer(result) -> str:
    """Turn a PlayerResult into the sentence the assistant would say."""
    if result.ok:
        return "OK"
    return ANSWERS.get(result.error, "Something went wrong.")


def main():
    logging.basicConfig(level=logging.INFO)
    print("🎵 Snips Player Intent Example")

    player = PlayerAdapter(dialog=None, options={"host": "localhost", "port": 6600, "defaultVolume": 60})
    if not player.wait_until_ready(5.0):
        print("❌ Could not connect to MPD")
        print("💡 Make sure MPD is running on localhost:6600")
        return 1

    try:
        # playMusic intent with an artist slot
        print(f"🗣️ {answer(player.create_playlist_if_possible(artist='Nina Simone'))}")
        player.play()

        # Assistant starts listening: duck, then restore
        player.set_volume_to_silence()
        player.set_volume_to_normal()

        # whatIsPlaying intent
        info = player.get_playing_info()
        if info.ok:
            print(f"🎵 Playing: {info.value.get('artist', 'Unknown')} - {info.value.get('title', 'Unknown')}")
        else:
            print(f"🗣️ {answer(info)}")

        # loadPlaylist intent
        print(f"🗣️ {answer(player.load_playlist_if_possible('My Mix'))}")

    except PlayerConnectionError as e:
        print(f"❌ {e.kind.value}")
        return 1

    finally:
        player.disconnect()
        print("👋 Disconnected")

    return 0


if __name__ == "__main__":
    sys.exit(main())
