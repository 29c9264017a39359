"""Domain service: ObjectIndexService."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from objectdb.infrastructure.category.category import ALL_CATEGORIES
from objectdb.infrastructure.loaders.text import keywords
from objectdb.infrastructure.storage.index_storage import category_key

from .entities import IndexEntry
from .exceptions import (
    CategoryNotFoundException,
    EntryNotFoundException,
    InvalidSearchQueryException,
)
from .path import Path, RootPath

if TYPE_CHECKING:
    from objectdb.infrastructure.storage.index_storage import ObjectIndex
    from objectdb.infrastructure.trie.radix import RadixObjectDb

logger = logging.getLogger(__name__)

MIN_LIMIT = 1
MAX_LIMIT = 50
DEFAULT_LIMIT = 10


class ObjectIndexService:
    def __init__(
        self,
        index: ObjectIndex,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._index = index
        self._default_limit = default_limit
        self._max_limit = max_limit

    def add(self, entry: IndexEntry) -> None:
        self._index.add(entry)

    def search(
        self,
        query: str,
        category: str | None = None,
        limit: int | None = None,
        exact: bool = False,
    ) -> list[IndexEntry]:
        """Entries matching every keyword of ``query``.

        Each keyword matches as a prefix unless ``exact`` is set. Without a
        category the global trie is searched; with one, only entries filed
        directly in that category match (use :meth:`browse` for a subtree).
        """
        if not query or not query.strip():
            raise InvalidSearchQueryException("Search query cannot be empty")

        words = keywords(query)
        if not words:
            raise InvalidSearchQueryException(f"Search query '{query}' has no keywords")

        trie = self.get_trie(category)

        results: list[IndexEntry] | None = None
        for word in words:
            found = trie.find_exact(word) if exact else trie.find(word)
            if results is None:
                results = found
            else:
                keep = set(found)
                results = [r for r in results if r in keep]
            if not results:
                return []

        return (results or [])[: self._clamp_limit(limit)]

    def browse(self, path: str) -> list[IndexEntry]:
        """Entries filed under ``path`` or any of its sub-categories."""
        node = self._index.paths.get_child(category_key(path))
        if node is None:
            raise CategoryNotFoundException(f"Category '{path}' not found")
        return node.get_objects()

    def list_categories(self, parent: str | None = None) -> list[str]:
        """Categories holding entries of their own, each one searchable.

        Intermediate levels like ``/reports`` are left out; :meth:`browse`
        reaches them.
        """
        prefix = category_key(parent) if parent else None
        categories: list[str] = []
        for path in self._index.categories.category_paths():
            if path == ALL_CATEGORIES:
                continue
            if prefix is not None and path.levels[: len(prefix)] != prefix.levels:
                continue
            if not self._holds_entries(path):
                continue
            categories.append(RootPath(path).path)
        return sorted(categories)

    def get_words(self, prefix: str, category: str | None = None) -> list[str]:
        trie = self.get_trie(category)
        return sorted(trie.get_words(prefix), key=str.lower)

    def get_entry(self, path: str) -> IndexEntry:
        entry = self._index.names.get_value(path)
        if entry is None:
            raise EntryNotFoundException(f"Entry '{path}' not found")
        return entry

    def get_trie(self, category: str | None = None) -> RadixObjectDb[IndexEntry]:
        if not category:
            return self._index.categories.get_all_categories()
        trie = self._index.categories.find_category(category_key(category))
        if trie is None:
            raise CategoryNotFoundException(f"Category '{category}' not found")
        return trie

    def _holds_entries(self, path: Path) -> bool:
        node = self._index.paths.get_child(path)
        return node is not None and len(node.get_exact_objects()) > 0

    def _clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._default_limit
        return max(MIN_LIMIT, min(limit, self._max_limit))
