"""Path-addressed trees with memoized resolution.

Nodes are keyed by lower-cased path levels. ``lookup`` only reads;
``lookup_or_create`` (and its alias ``get_child_by_path``) creates every
missing node on the way, so categories come into existence by being used.

A db memoizes ``path -> node``. All nodes of one tree share a
:class:`Generation` counter that every ``clear()`` bumps, and memo entries
stamped with an older generation are treated as misses.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

from objectdb.domain.path import Path, as_strict_path

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="TreeNode")

ROOT_NAME = "root"


def standardize(name: str) -> str:
    return name.lower()


class Generation:
    def __init__(self) -> None:
        self.value = 0

    def bump(self) -> None:
        self.value += 1


class TreeNode(Generic[N]):
    def __init__(self, name: str, generation: Generation | None = None) -> None:
        self._name = standardize(name)
        self._generation = generation if generation is not None else Generation()
        self._children: dict[str, N] = {}

    def _new_child(self, name: str) -> N:
        return type(self)(name, self._generation)

    def _clear_payload(self) -> None:
        pass

    @property
    def name(self) -> str:
        return self._name

    @property
    def generation(self) -> Generation:
        return self._generation

    def get_child(self, name: str) -> N | None:
        return self._children.get(standardize(name))

    def get_or_create_child(self, name: str) -> N:
        key = standardize(name)
        node = self._children.get(key)
        if node is None:
            node = self._new_child(name)
            self._children[key] = node
            logger.debug("Created node '%s' under '%s'", key, self._name)
        return node

    def lookup(self, path: str | Path) -> N | None:
        node = self
        for level in as_strict_path(path):
            node = node.get_child(level)
            if node is None:
                return None
        return node

    def lookup_or_create(self, path: str | Path) -> N:
        node = self
        for level in as_strict_path(path):
            node = node.get_or_create_child(level)
        return node

    def get_child_by_path(self, path: str | Path) -> N:
        return self.lookup_or_create(path)

    def get_child_count(self) -> int:
        return len(self._children)

    def walk(self, path: Path | None = None) -> Iterator[tuple[Path, N]]:
        """Depth-first ``(path, node)`` pairs below this node in name order."""
        base = path if path is not None else Path(rooted=True)
        for key in sorted(self._children):
            child = self._children[key]
            child_path = base.append(key)
            yield child_path, child
            yield from child.walk(child_path)

    def clear(self) -> None:
        self._children.clear()
        self._clear_payload()
        self._generation.bump()

    def __iter__(self) -> Iterator[N]:
        return iter(list(self._children.values()))

    def __lt__(self, other: TreeNode) -> bool:
        return self._name < other._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, children={len(self._children)})"


class TreeDb(Generic[N]):
    """Owns a root node and a generation-checked ``path -> node`` memo."""

    def __init__(self, root: N) -> None:
        self._root = root
        self._path_map: dict[Path, tuple[int, N]] = {}

    @property
    def root(self) -> N:
        return self._root

    def _memo_get(self, path: Path) -> N | None:
        entry = self._path_map.get(path)
        if entry is None:
            return None
        generation, node = entry
        if generation != self._root.generation.value:
            del self._path_map[path]
            return None
        return node

    def get_child_by_path(self, path: str | Path) -> N:
        key = as_strict_path(path)
        node = self._memo_get(key)
        if node is not None:
            return node
        node = self._root.lookup_or_create(key)
        self._path_map[key] = (self._root.generation.value, node)
        return node

    def lookup_or_create(self, path: str | Path) -> N:
        return self.get_child_by_path(path)

    def lookup(self, path: str | Path) -> N | None:
        key = as_strict_path(path)
        node = self._memo_get(key)
        if node is not None:
            return node
        return self._root.lookup(key)

    def clear(self) -> None:
        self._root.clear()
        self._path_map.clear()

    def walk(self) -> Iterator[tuple[Path, N]]:
        return self._root.walk()

    def __iter__(self) -> Iterator[N]:
        return iter(self._root)
