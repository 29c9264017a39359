"""Category trees whose nodes each own a searchable radix trie."""

from __future__ import annotations

import logging
from typing import Generic, Iterator, Protocol, TypeVar

from objectdb.domain.path import Path, StrictPath, as_strict_path
from objectdb.infrastructure.trie.radix import RadixObjectDb

from .tree import ROOT_NAME, Generation, TreeDb, TreeNode

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_CATEGORIES = StrictPath("all_categories")


class CategoryIndex(Protocol[T]):
    def get_category(self, path: str | Path) -> RadixObjectDb[T]: ...
    def find_category(self, path: str | Path) -> RadixObjectDb[T] | None: ...
    def get_all_categories(self) -> RadixObjectDb[T]: ...
    def category_paths(self) -> list[Path]: ...
    def clear(self) -> None: ...


class CategoryObjectNode(TreeNode["CategoryObjectNode[T]"], Generic[T]):
    def __init__(self, name: str, generation: Generation | None = None) -> None:
        super().__init__(name, generation)
        self._tree: RadixObjectDb[T] = RadixObjectDb()

    @property
    def tree(self) -> RadixObjectDb[T]:
        return self._tree

    def _clear_payload(self) -> None:
        self._tree.clear()


class CategoryObjectDb(TreeDb[CategoryObjectNode[T]]):
    """Stores objects by category, one radix trie per category node.

    Nothing is copied into the ``ALL_CATEGORIES`` trie automatically;
    callers that want cross-category search add to it themselves.
    """

    def __init__(self) -> None:
        super().__init__(CategoryObjectNode(ROOT_NAME))

    def get_all_categories(self) -> RadixObjectDb[T]:
        return self.get_child_by_path(ALL_CATEGORIES).tree

    def get_category(self, path: str | Path) -> RadixObjectDb[T]:
        return self.get_child_by_path(path).tree

    def find_category(self, path: str | Path) -> RadixObjectDb[T] | None:
        node = self.lookup(path)
        return node.tree if node is not None else None

    def category_paths(self) -> list[Path]:
        return [path for path, _ in self.walk()]


class SimpleCategoryObjectDb(Generic[T]):
    """Flat map from full category path to an independent radix trie.

    No intermediate categories exist: ``/a/b`` does not create ``/a``.
    """

    def __init__(self) -> None:
        self._children: dict[Path, RadixObjectDb[T]] = {}
        self._all_db: RadixObjectDb[T] = self.get_category(ALL_CATEGORIES)

    def get_category(self, *parts: object) -> RadixObjectDb[T]:
        path = _flat_key(parts)
        db = self._children.get(path)
        if db is None:
            logger.debug("Adding flat category %s", path)
            db = RadixObjectDb()
            self._children[path] = db
        return db

    def find_category(self, *parts: object) -> RadixObjectDb[T] | None:
        return self._children.get(_flat_key(parts))

    def get_all_categories(self) -> RadixObjectDb[T]:
        return self._all_db

    def category_paths(self) -> list[Path]:
        return sorted(self._children)

    def get_child_count(self) -> int:
        return len(self._children)

    def clear(self) -> None:
        self._children.clear()
        self._all_db = self.get_category(ALL_CATEGORIES)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._children))


def _flat_key(parts: tuple[object, ...]) -> Path:
    if len(parts) == 1:
        return as_strict_path(parts[0])
    return StrictPath(*parts)
