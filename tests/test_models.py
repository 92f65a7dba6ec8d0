from datetime import datetime
from pathlib import Path

from models.playlist import Playlist, PlaylistEntry
from models.song import Song, format_time


def test_entry_from_dict_defaults():
    entry = PlaylistEntry.from_dict({})
    assert entry.path == ""
    assert entry.title is None
    assert entry.date_added.timestamp() == 0


def test_playlist_dict_keys_and_values():
    added = datetime(2024, 1, 2, 3, 4, 5).astimezone()
    playlist = Playlist(
        id="p1",
        name="Road Trip",
        entries=[PlaylistEntry(path="/music/a.mp3", date_added=added, title="A", art_url="http://x/a.jpg")],
        created_at=added,
    )

    data = playlist.to_dict()

    assert data["id"] == "p1"
    assert data["createdAt"] == int(added.timestamp() * 1000)
    assert data["entries"][0]["artUrl"] == "http://x/a.jpg"
    assert data["entries"][0]["dateAdded"] == int(added.timestamp() * 1000)

    restored = Playlist.from_dict(data)
    assert restored.entries[0].date_added == added
    assert restored.entries[0].title == "A"


def test_playlist_from_dict_defaults_name():
    assert Playlist.from_dict({"id": "x"}).name == "Unknown"


def test_copy_with_keeps_id_and_created_at():
    playlist = Playlist(id="p1", name="Old")
    renamed = playlist.copy_with(name="New")
    assert renamed.id == "p1"
    assert renamed.created_at == playlist.created_at
    assert renamed.name == "New"
    assert playlist.name == "Old"


def test_song_from_file_uses_fallbacks():
    song = Song.from_file(Path("/music/Band - Tune.FLAC"), {"title": "", "duration": 61.9})
    assert song.title == "Band - Tune"
    assert song.artist == "Unknown Artist"
    assert song.album == "Unknown Album"
    assert song.file_extension == ".flac"
    assert song.duration_display == "1:01"


def test_song_from_dict_defaults():
    song = Song.from_dict({"filePath": "/x.mp3"})
    assert song.title == "Unknown Title"
    assert song.duration == 0.0


def test_format_time():
    assert format_time(0) == "0:00"
    assert format_time(754) == "12:34"
    assert format_time(-3) == "0:00"
