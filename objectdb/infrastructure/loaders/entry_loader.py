"""Loads index entries from JSON or YAML files.

Accepted layouts: a bare list of entries, or a mapping with an ``entries``
list. Each entry needs a ``name``; ``keywords`` default to the words of the
name and ``categories`` may be a single string or a list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from objectdb.domain.entities import IndexEntry
from objectdb.domain.exceptions import IndexLoadException

from .text import keywords

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


class EntryFileLoader:
    def load(self, path: Path) -> list[IndexEntry]:
        if not path.is_file():
            raise IndexLoadException(f"Index source '{path}' not found")

        data = self._read(path)
        if isinstance(data, dict):
            data = data.get("entries", [])
        if not isinstance(data, list):
            raise IndexLoadException(f"Index source '{path}' has no entry list")

        entries = [self._parse_entry(item) for item in data if isinstance(item, dict)]
        entries = [e for e in entries if e.name]
        logger.info("Loaded %d entries from %s", len(entries), path)
        return entries

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix.lower() in YAML_SUFFIXES:
                    return yaml.safe_load(f)
                return json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise IndexLoadException(f"Cannot parse index source '{path}': {e}") from e

    @staticmethod
    def _parse_entry(data: dict) -> IndexEntry:
        name = str(data.get("name", "")).strip()
        words = data.get("keywords") or keywords(name)
        if isinstance(words, str):
            words = keywords(words)
        categories = data.get("categories", data.get("category", []))
        if isinstance(categories, str):
            categories = [categories]
        return IndexEntry(
            name=name,
            keywords=tuple(str(w) for w in words),
            categories=tuple(str(c) for c in categories or []),
            description=str(data.get("description", "") or ""),
        )
