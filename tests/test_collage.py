from widgets.collage import collage_slots, tile_label


def test_no_images_gives_no_tiles():
    assert collage_slots([]) == []


def test_single_image_fills_collage():
    assert collage_slots(["/a.mp3"], ["u"]) == [("/a.mp3", "u")]


def test_identical_images_collapse_to_one_tile():
    assert collage_slots(["/a.mp3", "/a.mp3", "/a.mp3"], [None, None, None]) == [("/a.mp3", None)]


def test_two_images_repeat_to_fill_grid():
    slots = collage_slots(["/a.mp3", "/b.mp3"], ["ua", None])
    assert slots == [("/a.mp3", "ua"), ("/b.mp3", None), ("/a.mp3", "ua"), ("/b.mp3", None)]


def test_only_first_four_images_are_used():
    paths = [f"/{i}.mp3" for i in range(6)]
    assert [path for path, _ in collage_slots(paths)] == paths[:4]


def test_missing_urls_default_to_none():
    assert collage_slots(["/a.mp3", "/b.mp3"], ["ua"])[1] == ("/b.mp3", None)


def test_tile_label_prefers_art_url_host():
    assert tile_label(("/music/Song.mp3", "https://i.scdn.co/image/1")) == "i.scdn.co"
    assert tile_label(("/music/Song.mp3", None)) == "Song"
    assert tile_label(("", None)) == "♪"
