"""Ownership modes for walking a literal tree.

- ``BORROWED``: the tree belongs to the caller.  Child lists are read
  through an index cursor and never modified, so the same tree can be
  deserialized again (into the same or another target).
- ``OWNED``: the tree was handed over to the engine.  Each child list is
  drained in place; a child is popped out of its parent before it is
  dispatched, so it is released as soon as dispatch on it returns.

The mode is fixed when the root deserializer is created and inherited by
every child, so a subtree never switches mode halfway down.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class Ownership(str, Enum):
    BORROWED = "borrowed"
    OWNED = "owned"

    def cursor(self, items: list[Any]) -> _BorrowedCursor | _OwnedCursor:
        """Cursor over the remaining *items* of one array or object node."""
        if self is Ownership.OWNED:
            return _OwnedCursor(items)
        return _BorrowedCursor(items)


class _BorrowedCursor:
    """Front-to-back view over a list that is never mutated."""

    __slots__ = ("_items", "_index")

    def __init__(self, items: list[Any]) -> None:
        self._items = items
        self._index = 0

    def __len__(self) -> int:
        return len(self._items) - self._index

    def pop(self) -> Any:
        """Take the first remaining item."""
        item = self._items[self._index]
        self._index += 1
        return item


class _OwnedCursor:
    """Drains a list front to back, releasing each item as it is taken."""

    __slots__ = ("_items",)

    def __init__(self, items: list[Any]) -> None:
        # Reversed: the first remaining item is always last
        items.reverse()
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def pop(self) -> Any:
        """Take the first remaining item."""
        return self._items.pop()
