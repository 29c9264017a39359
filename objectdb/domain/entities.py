"""Domain entities stored in the object index."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class IndexEntry:
    """An application object registered under keywords and categories.

    Frozen and ordered so entries can live in both the insertion-ordered
    radix tries and the sorted path trie.
    """

    name: str
    keywords: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    description: str = ""

    def has_categories(self) -> bool:
        return len(self.categories) > 0


@dataclass(frozen=True)
class DictionaryWord:
    word: str
    definition: str | None = None
    synonyms: tuple[str, ...] = ()
