import json

import pytest

from models.playlist import LIKED_SONGS
from services.playlist_store import PlaylistStore, PlaylistStoreError
from tests.conftest import make_song


def test_create_playlist_appends_and_notifies(store):
    events = []
    store.subscribe(lambda: events.append(len(store.playlists)))

    first = store.create_playlist("Rock")
    store.create_playlist("Jazz")

    assert [p.name for p in store.playlists] == ["Rock", "Jazz"]
    assert first.id and first.entries == []
    assert events == [1, 2]


def test_create_playlist_rejects_blank_name(store):
    with pytest.raises(ValueError):
        store.create_playlist("   ")
    assert store.playlists == []


def test_unsubscribe_stops_notifications(store):
    events = []
    unsubscribe = store.subscribe(lambda: events.append("changed"))
    unsubscribe()
    store.create_playlist("Rock")
    assert events == []


def test_delete_and_rename(store):
    rock = store.create_playlist("Rock")
    jazz = store.create_playlist("Jazz")

    store.rename_playlist(jazz.id, "Smooth Jazz")
    store.delete_playlist(rock.id)

    assert [(p.id, p.name) for p in store.playlists] == [(jazz.id, "Smooth Jazz")]


def test_add_songs_skips_duplicate_paths(store):
    playlist = store.create_playlist("Mix")
    a = make_song("/music/a.mp3", title="A")
    b = make_song("/music/b.mp3", title="B")

    store.add_song_to_playlist(playlist.id, a)
    store.add_songs_to_playlist(playlist.id, [a, b, b])

    entries = store.get(playlist.id).entries
    assert [e.path for e in entries] == ["/music/a.mp3", "/music/b.mp3"]
    assert entries[0].title == "A"
    assert entries[0].artist == "Artist"


def test_remove_song_from_playlist(store):
    playlist = store.create_playlist("Mix")
    store.add_songs_to_playlist(playlist.id, [make_song("/a.mp3"), make_song("/b.mp3")])

    store.remove_song_from_playlist(playlist.id, "/a.mp3")

    assert [e.path for e in store.get(playlist.id).entries] == ["/b.mp3"]


def test_add_to_liked_songs_creates_playlist_once(store):
    store.add_to_liked_songs(make_song("/a.mp3"))
    liked = store.add_to_liked_songs(make_song("/b.mp3"))

    assert [p.name for p in store.playlists] == [LIKED_SONGS]
    assert [e.path for e in liked.entries] == ["/a.mp3", "/b.mp3"]


def test_playlists_persist_between_instances(tmp_path):
    storage = tmp_path / "data" / "playlists.json"
    store = PlaylistStore(storage)
    playlist = store.create_playlist("Rock")
    store.add_song_to_playlist(playlist.id, make_song("/a.mp3", title="A"))

    data = json.loads(storage.read_text(encoding="utf-8"))
    assert list(data) == [PlaylistStore.STORAGE_KEY]

    reloaded = PlaylistStore(storage)
    assert [p.name for p in reloaded.playlists] == ["Rock"]
    assert reloaded.get(playlist.id).entries[0].title == "A"


def test_corrupt_storage_starts_empty(tmp_path):
    storage = tmp_path / "playlists.json"
    storage.write_text("{not json", encoding="utf-8")

    assert PlaylistStore(storage).playlists == []


def test_save_failure_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = PlaylistStore(blocker / "playlists.json")
    events = []
    store.subscribe(lambda: events.append("changed"))

    with pytest.raises(PlaylistStoreError):
        store.create_playlist("Rock")
    assert events == ["changed"]
