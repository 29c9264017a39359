"""Trie over path levels.

Each node collects the objects of every path that runs through it, so the
node for ``/reports`` holds everything filed under ``/reports/finance`` and
``/reports/hr/2024`` as well. Objects are kept sorted and children are
visited in level order, which makes listings deterministic.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

from objectdb.domain.path import Path, StrictPath, as_strict_path

from .base import PrefixNode
from .containers import ObjectCollection, SortedObjectSet

T = TypeVar("T")


class PathObjectNode(PrefixNode[str, T]):
    def __init__(self, prefix: Path | None = None, level: str = "") -> None:
        super().__init__(level, prefix if prefix is not None else StrictPath(rooted=True))

    def _tokenize(self, key: object) -> Iterable[str]:
        return as_strict_path(key)

    def _extend_prefix(self, token: str) -> Path:
        return StrictPath(self._prefix, token)

    def _new_child(self, token: str, prefix: object) -> PathObjectNode[T]:
        return PathObjectNode(prefix, token)

    def _new_objects(self) -> ObjectCollection[T]:
        return SortedObjectSet()

    def _iter_child_keys(self) -> Iterable[str]:
        return sorted(self._children)

    def add_object(self, key: str | Path, obj: T | None) -> None:
        super().add_object(as_strict_path(key), obj)

    @property
    def level(self) -> str:
        return self._token

    @property
    def prefix(self) -> Path:
        return self._prefix

    def __lt__(self, other: PathObjectNode[T]) -> bool:
        return self._prefix < other._prefix
