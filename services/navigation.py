from __future__ import annotations

import logging
from typing import List, Optional

from models.navigation import NavigationItem
from services.observable import Observable

logger = logging.getLogger(__name__)


class NavigationStack(Observable):
    """Stack of pushed views. An empty stack means the root view is shown."""

    def __init__(self) -> None:
        super().__init__()
        self._items: List[NavigationItem] = []

    @property
    def current(self) -> Optional[NavigationItem]:
        return self._items[-1] if self._items else None

    @property
    def depth(self) -> int:
        return len(self._items)

    def push(self, item: NavigationItem) -> None:
        self._items.append(item)
        logger.debug(f"Navigation push: {item.type.value} {item.data!r}")
        self._notify()

    def pop(self) -> Optional[NavigationItem]:
        """Remove the top item. Popping an empty stack is a no-op."""
        if not self._items:
            return None
        item = self._items.pop()
        logger.debug(f"Navigation pop: {item.type.value} {item.data!r}")
        self._notify()
        return item

    def clear(self) -> None:
        if self._items:
            self._items.clear()
            self._notify()
