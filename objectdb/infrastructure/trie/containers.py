"""Object collection policies for trie nodes."""

from __future__ import annotations

from bisect import bisect_left
from typing import Generic, Iterator, Protocol, TypeVar

T = TypeVar("T")


class ObjectCollection(Protocol[T]):
    def add(self, item: T) -> bool: ...
    def clear(self) -> None: ...
    def copy(self) -> list[T]: ...
    def __iter__(self) -> Iterator[T]: ...
    def __len__(self) -> int: ...
    def __contains__(self, item: object) -> bool: ...


class UniqueList(Generic[T]):
    """Insertion-ordered list that ignores repeated items."""

    def __init__(self) -> None:
        self._items: dict[T, None] = {}

    def add(self, item: T) -> bool:
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items


class SortedObjectSet(Generic[T]):
    """Sorted set using a list + bisect."""

    def __init__(self) -> None:
        self._items: list[T] = []

    def add(self, item: T) -> bool:
        i = bisect_left(self._items, item)
        if i < len(self._items) and self._items[i] == item:
            return False
        self._items.insert(i, item)
        return True

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        i = bisect_left(self._items, item)
        return i < len(self._items) and self._items[i] == item
