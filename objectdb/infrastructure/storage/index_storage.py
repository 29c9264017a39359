"""Index storage with an explicit build step."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from objectdb.domain.entities import IndexEntry
from objectdb.domain.exceptions import IndexNotBuiltException
from objectdb.domain.path import StrictPath
from objectdb.infrastructure.category.category import (
    CategoryIndex,
    CategoryObjectDb,
    SimpleCategoryObjectDb,
)
from objectdb.infrastructure.category.text import TextObjectDb
from objectdb.infrastructure.loaders.entry_loader import EntryFileLoader
from objectdb.infrastructure.loaders.text import keywords
from objectdb.infrastructure.trie.path_node import PathObjectNode

logger = logging.getLogger(__name__)

VALID_LAYOUTS = {"tree", "flat"}


def category_key(category: str) -> StrictPath:
    """Category paths are matched case-insensitively in every layout."""
    return StrictPath(category.lower())


def index_words(entry: IndexEntry) -> list[str]:
    """Keywords split the way queries are, so a keyword like ``e-mail`` can be searched for."""
    words: dict[str, None] = {}
    for keyword in entry.keywords:
        words.update(dict.fromkeys(keywords(keyword)))
    return list(words)


def create_category_index(layout: str) -> CategoryIndex[IndexEntry]:
    if layout not in VALID_LAYOUTS:
        raise ValueError(f"Unknown index layout: '{layout}'. Use: {', '.join(sorted(VALID_LAYOUTS))}")
    return CategoryObjectDb() if layout == "tree" else SimpleCategoryObjectDb()


class ObjectIndex:
    """The built structures for one set of entries.

    ``categories`` holds one keyword trie per category plus the global
    trie, ``paths`` aggregates entries up the category hierarchy and
    ``names`` maps ``<category>/<entry name>`` to the entry itself.
    """

    def __init__(self, layout: str = "tree") -> None:
        self.categories = create_category_index(layout)
        self.paths: PathObjectNode[IndexEntry] = PathObjectNode()
        self.names: TextObjectDb[IndexEntry] = TextObjectDb()
        self.size = 0

    def add(self, entry: IndexEntry) -> None:
        words = index_words(entry)
        everything = self.categories.get_all_categories()
        for word in words:
            everything.add_object(word, entry)

        for category in entry.categories:
            path = category_key(category)
            if path.is_empty():
                continue
            trie = self.categories.get_category(path)
            for word in words:
                trie.add_object(word, entry)
            self.paths.add_object(path, entry)
            self.names.set_value(path.append(entry.name), entry)

        self.size += 1

    def clear(self) -> None:
        self.categories.clear()
        self.paths.clear()
        self.names.clear()
        self.size = 0


class IndexStorage:
    """Loads entries from a source file and builds an :class:`ObjectIndex`.

    ``build`` runs under a lock; once it returns the index is only read.
    """

    def __init__(self, loader: EntryFileLoader, source: Path, layout: str = "tree") -> None:
        self._loader = loader
        self._source = source
        self._layout = layout
        self._index: ObjectIndex | None = None
        self._lock = threading.Lock()

    def build(self) -> ObjectIndex:
        with self._lock:
            logger.info("Building %s index from: %s", self._layout, self._source)
            entries = self._loader.load(self._source)
            index = ObjectIndex(self._layout)
            for entry in entries:
                index.add(entry)
            self._index = index
            logger.info(
                "Index built: %d entries, %d categories",
                index.size,
                len(index.categories.category_paths()),
            )
            return index

    @property
    def index(self) -> ObjectIndex:
        if self._index is None:
            raise IndexNotBuiltException("Index has not been built, call build() first")
        return self._index

    @property
    def is_built(self) -> bool:
        return self._index is not None
