"""Append-only arena storage addressed by integer ids.

Plots, farms and districts are stored in a ``Store`` and referred to by the
index they were inserted at. Nothing is ever removed, so there is no id
reuse and every id handed out stays dereferenceable for the lifetime of
the store.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Store(Generic[T]):
    """Growable, index-addressed list of values."""

    def __init__(self) -> None:
        self._items: list[T] = []

    def insert(self, item: T) -> int:
        """Append ``item`` and return its id."""
        self._items.append(item)
        return len(self._items) - 1

    def get(self, item_id: int) -> T:
        """Return the value stored under ``item_id``.

        Raises:
            KeyError: If ``item_id`` was never issued by this store.
        """
        if not 0 <= item_id < len(self._items):
            raise KeyError(f"Unknown store id {item_id}")
        return self._items[item_id]

    def contains(self, item_id: int) -> bool:
        return 0 <= item_id < len(self._items)

    def ids(self) -> range:
        return range(len(self._items))

    def items(self) -> Iterator[tuple[int, T]]:
        """Iterate ``(id, value)`` pairs in insertion order."""
        return iter(enumerate(self._items))

    def values(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)
