from __future__ import annotations

import hashlib
from pathlib import PurePosixPath
from typing import Optional, Sequence
from urllib.parse import urlparse

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

from styles import COLOR_BASS, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_SURFACE

ArtRef = tuple[str, Optional[str]]

TILE_COLORS = [COLOR_BASS, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED]
COLLAGE_TILES = 4


def collage_slots(
    image_paths: Sequence[str],
    art_urls: Optional[Sequence[Optional[str]]] = None,
) -> list[ArtRef]:
    """Pick the tiles for a collage.

    Returns an empty list when there are no images, a single tile when there
    is one image or every (path, url) pair is the same, and otherwise exactly
    four tiles, reusing images in order when fewer than four are available.
    """
    if not image_paths:
        return []

    urls = list(art_urls) if art_urls is not None else [None] * len(image_paths)
    refs = [
        (path, urls[i] if i < len(urls) else None)
        for i, path in enumerate(image_paths[:COLLAGE_TILES])
    ]

    if len(refs) == 1 or all(ref == refs[0] for ref in refs[1:]):
        return [refs[0]]

    return [refs[i % len(refs)] for i in range(COLLAGE_TILES)]


def tile_label(ref: ArtRef) -> str:
    """Short text shown on a tile: the art URL's host, else the file stem."""
    path, url = ref
    if url:
        host = urlparse(url).netloc
        if host:
            return host
    stem = PurePosixPath(path.replace("\\", "/")).stem
    return stem or "♪"


def tile_color(ref: ArtRef) -> str:
    digest = hashlib.md5(f"{ref[0]}|{ref[1] or ''}".encode("utf-8")).digest()
    return TILE_COLORS[digest[0] % len(TILE_COLORS)]


class Collage(Container):
    """Composite thumbnail of up to four songs' artwork."""

    DEFAULT_CSS = """
    Collage {
        layout: grid;
        grid-size: 2 2;
        width: 24;
        height: 8;
        background: #1c1c1c;
    }

    Collage.single {
        grid-size: 1 1;
    }

    Collage.empty {
        grid-size: 1 1;
    }

    Collage.blurred {
        opacity: 40%;
    }

    Collage > .collage-tile {
        width: 100%;
        height: 100%;
        content-align: center middle;
    }
    """

    def __init__(
        self,
        image_paths: Sequence[str],
        art_urls: Optional[Sequence[Optional[str]]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.slots = collage_slots(image_paths, art_urls)
        if not self.slots:
            self.add_class("empty")
        elif len(self.slots) == 1:
            self.add_class("single")

    def compose(self) -> ComposeResult:
        if not self.slots:
            yield Static(Text("♪", style=COLOR_MUTED), classes="collage-tile")
            return

        for ref in self.slots:
            color = tile_color(ref)
            tile = Static(Text(tile_label(ref), style=f"bold {COLOR_SURFACE}"), classes="collage-tile")
            tile.styles.background = color
            yield tile
