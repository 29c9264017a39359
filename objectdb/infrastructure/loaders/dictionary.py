"""Word lists loaded from XML or TSV files.

These are plain, explicitly constructed objects. Build one, call ``load_*``
and pass it to whoever needs it.

XML layouts::

    <dictionary>
      <word name="cake" definition="a baked dessert">
        <synonym name="gateau"/>
      </word>
    </dictionary>

    <keywords><word>lymphoma</word></keywords>

    <substitutions><word name="colour" substitute="color"/></substitutions>
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from bs4 import BeautifulSoup

from objectdb.domain.entities import DictionaryWord
from objectdb.domain.exceptions import IndexLoadException
from objectdb.infrastructure.trie.radix import RadixObjectDb

from .text import keywords

logger = logging.getLogger(__name__)

TAB_DELIMITER = "\t"


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise IndexLoadException(f"File '{path}' not found")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise IndexLoadException(f"File '{path}' is not valid UTF-8: {e}") from e


def _read_soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(_read_text(path), "html.parser")


def _read_tsv(path: Path) -> list[list[str]]:
    rows: list[list[str]] = []
    for line in _read_text(path).splitlines():
        if not line.strip():
            continue
        rows.append(line.split(TAB_DELIMITER))
    return rows


class Dictionary:
    """Words with optional definitions and synonyms.

    Lookups are case-insensitive. ``complete`` resolves a prefix of any word
    or synonym to the canonical words it belongs to.
    """

    def __init__(self) -> None:
        self._words: set[str] = set()
        self._definitions: dict[str, str] = {}
        self._synonyms: dict[str, set[str]] = {}
        self._completions: RadixObjectDb[str] = RadixObjectDb()

    def load_xml(self, path: Path) -> Dictionary:
        soup = _read_soup(path)
        word: str | None = None
        for tag in soup.find_all(["word", "synonym"]):
            name = tag.get("name")
            if not name:
                continue
            if tag.name == "word":
                word = name
                self.add_word(word, tag.get("definition"))
            elif word is not None:
                self.add_synonym(word, name)
        logger.info("Loaded dictionary from %s: %d words", path, len(self._words))
        return self

    def load_tsv(self, path: Path) -> Dictionary:
        for tokens in _read_tsv(path):
            definition = tokens[1] if len(tokens) > 1 and tokens[1] else None
            self.add_word(tokens[0], definition)
            for synonym in tokens[2:]:
                if synonym:
                    self.add_synonym(tokens[0], synonym)
        logger.info("Loaded dictionary from %s: %d words", path, len(self._words))
        return self

    def add_word(self, word: str, definition: str | None = None) -> None:
        key = word.lower()
        self._words.add(key)
        if definition is not None:
            self._definitions[key] = definition
        self._completions.add_object(word, key)

    def add_synonym(self, word: str, synonym: str) -> None:
        key = word.lower()
        self._synonyms.setdefault(key, set()).add(synonym)
        self._words.add(synonym.lower())
        self._completions.add_object(synonym, key)

    def exists(self, word: str) -> bool:
        return word.lower() in self._words

    def get_definition(self, word: str) -> str | None:
        return self._definitions.get(word.lower())

    def get_synonyms(self, word: str) -> set[str]:
        """Synonyms of ``word``, including ``word`` itself."""
        return {word} | self._synonyms.get(word.lower(), set())

    def complete(self, prefix: str) -> list[str]:
        return self._completions.find(prefix)

    def entries(self) -> list[DictionaryWord]:
        return [
            DictionaryWord(
                word=w,
                definition=self._definitions.get(w),
                synonyms=tuple(sorted(self._synonyms.get(w, ()))),
            )
            for w in sorted(self._words)
        ]

    def __len__(self) -> int:
        return len(self._words)


class KeywordSet:
    def __init__(self) -> None:
        self._words: set[str] = set()

    def load_xml(self, path: Path) -> KeywordSet:
        for tag in _read_soup(path).find_all("word"):
            text = tag.get_text().strip()
            if text:
                self.add_word(text)
        logger.info("Loaded %d keywords from %s", len(self._words), path)
        return self

    def add_word(self, word: str) -> None:
        self._words.add(word.lower())

    def exists(self, word: str) -> bool:
        return word.lower() in self._words

    def search_for_keywords(self, sentence: str) -> list[str]:
        """Words of ``sentence`` plus every known keyword it contains."""
        found = set(keywords(sentence))
        s = sentence.lower()
        found.update(word for word in self._words if word in s)
        return sorted(found)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)


class Substitutions:
    def __init__(self) -> None:
        self._substitutions: dict[str, str] = {}

    def load_xml(self, path: Path) -> Substitutions:
        for tag in _read_soup(path).find_all("word"):
            name = tag.get("name")
            substitute = tag.get("substitute")
            if name and substitute is not None:
                self.add_substitution(name, substitute)
        return self

    def load_tsv(self, path: Path) -> Substitutions:
        for tokens in _read_tsv(path):
            if len(tokens) > 1:
                self.add_substitution(tokens[0], tokens[1])
        return self

    def add_substitution(self, word: str, substitute: str) -> None:
        self._substitutions[word] = substitute

    def get_substitute(self, word: str | None) -> str | None:
        if word is None:
            return None
        return self._substitutions.get(word, word)
