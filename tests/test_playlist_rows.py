from datetime import datetime

from models.playlist import Playlist
from views.playlist_detail import (
    format_date_added,
    header_art,
    resolve_rows,
    row_subtitle,
    synthesize_song,
)
from views.playlists import card_name, song_count, sort_for_display
from tests.conftest import make_entry, make_song


def test_liked_songs_sorted_first_others_keep_order():
    playlists = [Playlist(id="1", name="Rock"), Playlist(id="2", name="Liked Songs"), Playlist(id="3", name="Jazz")]

    assert [p.name for p in sort_for_display(playlists)] == ["Liked Songs", "Rock", "Jazz"]
    assert [p.name for p in playlists] == ["Rock", "Liked Songs", "Jazz"]


def test_sort_without_liked_songs_is_unchanged():
    playlists = [Playlist(id=str(i), name=name) for i, name in enumerate(["B", "A", "C"])]
    assert [p.id for p in sort_for_display(playlists)] == ["0", "1", "2"]


def test_library_hit_uses_library_song_verbatim(library):
    song = make_song("/music/a.mp3", title="Real Title", duration=201.5)
    library.set_songs([song])
    playlist = Playlist(id="p", name="Mix", entries=[make_entry("/music/a.mp3", title="Stale")])

    rows = resolve_rows(playlist, library)

    assert rows[0].song is song
    assert rows[0].date_added == datetime(2024, 3, 7, 12, 0)


def test_library_miss_synthesizes_from_path(library):
    playlist = Playlist(id="p", name="Mix", entries=[make_entry("/music/a.mp3")])

    song = resolve_rows(playlist, library)[0].song

    assert song.title == "a.mp3"
    assert song.artist == "Unknown Artist"
    assert song.album == "Unknown Album"
    assert song.duration == 0
    assert song.file_path == "/music/a.mp3"


def test_synthesized_song_keeps_cached_metadata():
    entry = make_entry(
        "/gone/b.flac", title="Cached", artist="Someone", album="Record",
        art_url="https://img.example/b.jpg", source_url="https://v.example/b",
    )

    song = synthesize_song(entry)

    assert (song.title, song.artist, song.album) == ("Cached", "Someone", "Record")
    assert song.online_art_url == "https://img.example/b.jpg"
    assert song.source_url == "https://v.example/b"
    assert song.file_extension == ".flac"


def test_synthesized_song_with_empty_title_and_path():
    song = synthesize_song(make_entry("", title=""))
    assert song.title == "Unknown Song"
    assert song.source_url == ""


def test_rows_follow_playlist_order(library):
    library.set_songs([make_song("/b.mp3", title="B")])
    playlist = Playlist(id="p", name="Mix", entries=[make_entry("/a.mp3"), make_entry("/b.mp3"), make_entry("/c.mp3")])

    assert [r.song.title for r in resolve_rows(playlist, library)] == ["a.mp3", "B", "c.mp3"]


def test_header_art_takes_first_four(library):
    entries = [make_entry(f"/{i}.mp3", art_url=f"https://img/{i}") for i in range(6)]
    rows = resolve_rows(Playlist(id="p", name="Mix", entries=entries), library)

    paths, urls = header_art(rows)

    assert paths == ["/0.mp3", "/1.mp3", "/2.mp3", "/3.mp3"]
    assert urls == ["https://img/0", "https://img/1", "https://img/2", "https://img/3"]
    assert header_art([]) == ([], [])


def test_format_date_added():
    assert format_date_added(datetime(2024, 3, 7)) == "07-03-2024"


def test_row_subtitle_falls_back_to_path():
    assert row_subtitle(make_song("/x.mp3", artist="Unknown Artist")) == "/x.mp3"
    assert row_subtitle(make_song("/x.mp3", artist="Unknown")) == "/x.mp3"
    assert row_subtitle(make_song("/x.mp3", artist="Band")) == "Band"


def test_card_name_pins_only_liked_songs():
    liked = Playlist(id="1", name="Liked Songs")
    rock = Playlist(id="2", name="Rock")

    assert card_name(liked).plain == "📌 Liked Songs"
    assert card_name(rock).plain == "Rock"


def test_song_count_label():
    playlist = Playlist(id="1", name="Mix", entries=[make_entry("/a.mp3"), make_entry("/b.mp3")])

    assert song_count(playlist) == "2 songs"
    assert song_count(Playlist(id="2", name="Empty")) == "0 songs"
