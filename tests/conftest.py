from datetime import datetime

import pytest

from models.playlist import PlaylistEntry
from models.song import Song
from services.music_library import MusicLibrary
from services.navigation import NavigationStack
from services.playlist_store import PlaylistStore


class FakePlayer:
    """Playback controller that records play commands."""

    def __init__(self):
        self.calls = []

    def play_song(self, song, queue):
        self.calls.append((song, list(queue)))

    def is_playing(self):
        return False

    def resume(self):
        pass

    def pause(self):
        pass


def make_song(path, title="Song", artist="Artist", album="Album", duration=180.0):
    return Song(title=title, artist=artist, album=album, file_path=path, file_extension=".mp3", duration=duration)


def make_entry(path, **kwargs):
    kwargs.setdefault("date_added", datetime(2024, 3, 7, 12, 0))
    return PlaylistEntry(path=path, **kwargs)


@pytest.fixture
def store():
    return PlaylistStore()


@pytest.fixture
def library():
    return MusicLibrary()


@pytest.fixture
def navigation():
    return NavigationStack()


@pytest.fixture
def player():
    return FakePlayer()
