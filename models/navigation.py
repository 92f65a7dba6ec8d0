from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NavigationType(Enum):
    """Kinds of views that can be pushed on the navigation stack."""
    PLAYLIST = "playlist"


@dataclass(frozen=True)
class NavigationItem:
    """An entry on the navigation stack: the target view and its payload."""
    type: NavigationType
    data: Any = None
