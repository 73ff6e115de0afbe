#!/usr/bin/env python3
"""
Test Class for the Snips MPD Client

Tests the python-mpd2 wrapper with a patched mpd.MPDClient:
- Connection lifecycle events
- Command execution and error translation
- Adapter running on top of the real wrapper
"""

import unittest
import logging
from unittest.mock import MagicMock, patch

import mpd

from snipsplayer.errors import MPDConnectionFailed, MPDConnectionEnd
from snipsplayer.mpd.client import SnipsMPDClient, flatten_filters
from snipsplayer.player import PlayerAdapter
from snipsplayer.player_model import ConnectionEvent, ConnectionState, PlayerError

# Setup logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class MPDClientTestCase(unittest.TestCase):
    """Patches mpd.MPDClient for every test."""

    def setUp(self):
        patcher = patch('mpd.MPDClient')
        self.mpd_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.mpd = self.mpd_class.return_value

    def make_client(self, **kwargs):
        client = SnipsMPDClient(**kwargs)
        self.callbacks = {event: MagicMock() for event in ConnectionEvent}
        for event, callback in self.callbacks.items():
            client.add_callback(event, callback)
        return client

    def connected_client(self):
        client = self.make_client()
        client.connect()
        return client


class TestSnipsMPDClientConnection(MPDClientTestCase):
    """Connection lifecycle."""

    def test_init_sets_timeout(self):
        client = self.make_client(host='mpd.local', port=6601, timeout=3)

        self.assertEqual(client.host, 'mpd.local')
        self.assertEqual(self.mpd.timeout, 3)
        self.assertFalse(client.is_connected())

    def test_connect_emits_ready(self):
        client = self.make_client(host='mpd.local', port=6601)

        client.connect()

        self.mpd.connect.assert_called_once_with('mpd.local', 6601)
        self.assertTrue(client.is_connected())
        self.callbacks[ConnectionEvent.READY].assert_called_once_with()
        self.callbacks[ConnectionEvent.SOCKET_ERROR].assert_not_called()

    def test_connect_sends_password(self):
        client = self.make_client(password='secret')

        client.connect()

        self.mpd.password.assert_called_once_with('secret')

    def test_wrong_password_emits_socket_error(self):
        error = mpd.CommandError("incorrect password")
        self.mpd.password.side_effect = error
        client = self.make_client(password='wrong')

        with self.assertRaises(MPDConnectionFailed):
            client.connect()

        self.mpd.disconnect.assert_called_once_with()
        self.assertFalse(client.is_connected())
        self.callbacks[ConnectionEvent.SOCKET_ERROR].assert_called_once_with(error=error)
        self.callbacks[ConnectionEvent.READY].assert_not_called()

    def test_already_connected_counts_as_connected(self):
        self.mpd.connect.side_effect = mpd.ConnectionError("Already connected")
        client = self.make_client()

        client.connect()

        self.assertTrue(client.is_connected())
        self.callbacks[ConnectionEvent.READY].assert_called_once_with()

    def test_connect_failure_emits_socket_error(self):
        error = ConnectionRefusedError("refused")
        self.mpd.connect.side_effect = error
        client = self.make_client()

        with self.assertRaises(MPDConnectionFailed):
            client.connect()

        self.assertFalse(client.is_connected())
        self.callbacks[ConnectionEvent.SOCKET_ERROR].assert_called_once_with(error=error)
        self.callbacks[ConnectionEvent.READY].assert_not_called()

    def test_disconnect_emits_nothing(self):
        client = self.connected_client()

        client.disconnect()

        self.mpd.close.assert_called_once_with()
        self.mpd.disconnect.assert_called_once_with()
        self.assertFalse(client.is_connected())
        self.callbacks[ConnectionEvent.SOCKET_END].assert_not_called()


class TestSnipsMPDClientCommands(MPDClientTestCase):
    """Command execution."""

    def test_command_without_connection_fails_fast(self):
        client = self.make_client()

        with self.assertRaises(MPDConnectionFailed):
            client.play()

        self.mpd.play.assert_not_called()

    def test_connection_lost_during_command_emits_socket_end(self):
        client = self.connected_client()
        self.mpd.stop.side_effect = mpd.ConnectionError("Connection lost while reading line")

        with self.assertRaises(MPDConnectionEnd):
            client.stop()

        self.assertFalse(client.is_connected())
        self.callbacks[ConnectionEvent.SOCKET_END].assert_called_once()

    def test_command_error_propagates_unchanged(self):
        client = self.connected_client()
        self.mpd.load.side_effect = mpd.CommandError("No such playlist")

        with self.assertRaises(mpd.CommandError):
            client.load_playlist('missing.m3u')

        self.assertTrue(client.is_connected())
        self.callbacks[ConnectionEvent.SOCKET_END].assert_not_called()

    def test_transport_commands(self):
        client = self.connected_client()

        client.play()
        client.play(3)
        client.pause(True)
        client.pause(False)
        client.next()
        client.previous()

        self.mpd.play.assert_any_call()
        self.mpd.play.assert_any_call(3)
        self.mpd.pause.assert_any_call(1)
        self.mpd.pause.assert_any_call(0)
        self.mpd.next.assert_called_once_with()
        self.mpd.previous.assert_called_once_with()

    def test_volume_and_random(self):
        client = self.connected_client()

        client.set_volume(42)
        client.set_random(False)

        self.mpd.setvol.assert_called_once_with(42)
        self.mpd.random.assert_called_once_with(0)

    def test_volume_out_of_range(self):
        client = self.connected_client()

        with self.assertRaises(ValueError):
            client.set_volume(101)

        self.mpd.setvol.assert_not_called()

    def test_search_flattens_filters(self):
        client = self.connected_client()
        self.mpd.search.return_value = [{'file': 'a.mp3'}]

        songs = client.search([["Title", "X"], ["Album", ""], ["Artist", ""]])
        client.search_add([["Title", "X"], ["Album", ""], ["Artist", ""]])

        self.assertEqual(songs, [{'file': 'a.mp3'}])
        self.mpd.search.assert_called_once_with("Title", "X", "Album", "", "Artist", "")
        self.mpd.searchadd.assert_called_once_with("Title", "X", "Album", "", "Artist", "")

    def test_status_and_playlists(self):
        client = self.connected_client()
        self.mpd.status.return_value = {'state': 'play'}
        self.mpd.currentsong.return_value = {'title': 'X'}
        self.mpd.listplaylist.return_value = ['a.mp3']

        self.assertEqual(client.get_status(), {'state': 'play'})
        self.assertEqual(client.get_current_song(), {'title': 'X'})
        self.assertEqual(client.list_playlist('mix.m3u'), ['a.mp3'])

        client.clear_playlist()
        client.load_playlist('mix.m3u')
        self.mpd.clear.assert_called_once_with()
        self.mpd.load.assert_called_once_with('mix.m3u')

    def test_flatten_filters(self):
        self.assertEqual(flatten_filters([["Artist", "A"]]), ["Artist", "A"])
        self.assertEqual(flatten_filters([]), [])


class TestPlayerOnMPDClient(MPDClientTestCase):
    """The adapter running on the real wrapper."""

    def make_player(self, **kwargs):
        player = PlayerAdapter(dialog=None, options={'host': 'mpd.local'}, **kwargs)
        player.connect_thread.join(1.0)
        return player

    def test_ready_baseline(self):
        player = self.make_player()

        self.assertTrue(player.is_ready)
        self.mpd.connect.assert_called_once_with('mpd.local', 6600)
        self.mpd.setvol.assert_called_once_with(80)
        self.mpd.random.assert_called_once_with(1)
        self.mpd.stop.assert_called_once_with()

    def test_ready_without_mixer_still_stops(self):
        self.mpd.setvol.side_effect = mpd.CommandError("[52@0] {setvol} problems setting volume")
        on_error = MagicMock()

        player = self.make_player(on_error=on_error)

        self.assertTrue(player.is_ready)
        self.mpd.random.assert_called_once_with(1)
        self.mpd.stop.assert_called_once_with()
        on_error.assert_not_called()
        self.assertIsNone(player.last_error)

    def test_wrong_password_reaches_on_error(self):
        self.mpd.password.side_effect = mpd.CommandError("incorrect password")
        on_error = MagicMock()

        player = PlayerAdapter(dialog=None, options={'password': 'wrong'}, on_error=on_error)
        player.connect_thread.join(1.0)

        on_error.assert_called_once()
        self.assertIsInstance(on_error.call_args[0][0], MPDConnectionFailed)
        self.assertIs(player.last_error, on_error.call_args[0][0])
        self.assertEqual(player.state, ConnectionState.DISCONNECTED)
        self.mpd.disconnect.assert_called_once_with()

    def test_socket_error_reaches_on_error(self):
        self.mpd.connect.side_effect = ConnectionRefusedError("refused")
        on_error = MagicMock()

        player = self.make_player(on_error=on_error)

        on_error.assert_called_once()
        self.assertEqual(on_error.call_args[0][0].kind, PlayerError.MPD_CONNECTION_FAILED)
        self.assertEqual(player.state, ConnectionState.DISCONNECTED)
        self.assertFalse(player.wait_until_ready(0))

    def test_socket_end_reaches_caller(self):
        player = self.make_player()
        self.mpd.status.side_effect = mpd.ConnectionError("Connection lost while reading line")

        with self.assertRaises(MPDConnectionEnd) as ctx:
            player.get_playing_info()

        self.assertEqual(ctx.exception.kind, PlayerError.MPD_CONNECTION_END)
        self.assertFalse(player.is_ready)

    def test_playing_info(self):
        player = self.make_player()
        self.mpd.status.return_value = {'state': 'play'}
        self.mpd.currentsong.return_value = {'title': 'So What'}

        result = player.get_playing_info()

        self.assertTrue(result.ok)
        self.assertEqual(result.value, {'title': 'So What'})


if __name__ == '__main__':
    unittest.main()
