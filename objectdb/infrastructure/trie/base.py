"""Generic prefix trie shared by the character and path-level tries.

Every node accumulates the objects of all keys that pass through it, so the
objects of a prefix are read straight off the node the prefix resolves to.
Subclasses choose the alphabet (how a key splits into tokens), how tokens are
normalized, how the cached prefix grows, and which collection keeps objects.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, TypeVar

from objectdb.domain.exceptions import PrefixNotFoundException

from .containers import ObjectCollection, UniqueList

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class PrefixNode(Generic[K, T]):
    """Trie node keyed by tokens of type ``K`` holding objects of type ``T``."""

    def __init__(self, token: K, prefix: object) -> None:
        self._token = self._standardize(token)
        self._prefix = prefix
        self._words: set = set()
        self._objects: ObjectCollection[T] = self._new_objects()
        self._exact: ObjectCollection[T] = self._new_objects()
        self._children: dict[K, PrefixNode[K, T]] = {}

    # -- hooks --------------------------------------------------------------

    def _tokenize(self, key: object) -> Iterable[K]:
        raise NotImplementedError

    def _standardize(self, token: K) -> K:
        return token

    def _extend_prefix(self, token: K) -> object:
        raise NotImplementedError

    def _new_child(self, token: K, prefix: object) -> PrefixNode[K, T]:
        raise NotImplementedError

    def _new_objects(self) -> ObjectCollection[T]:
        return UniqueList()

    def _iter_child_keys(self) -> Iterable[K]:
        return self._children.keys()

    # -- mutation -----------------------------------------------------------

    def add_object(self, key: object, obj: T | None) -> None:
        """Register ``obj`` under ``key`` and under every prefix of ``key``.

        Empty keys and ``None`` objects are ignored.
        """
        if not key or obj is None:
            return

        self._objects.add(obj)
        self._words.add(key)

        node: PrefixNode[K, T] = self
        for token in self._tokenize(key):
            node = node._create_child(token)
            node._objects.add(obj)
            node._words.add(key)

        node._exact.add(obj)

    def _create_child(self, token: K) -> PrefixNode[K, T]:
        token = self._standardize(token)
        child = self._children.get(token)
        if child is None:
            child = self._new_child(token, self._extend_prefix(token))
            self._children[token] = child
        return child

    def clear(self) -> None:
        for child in self._children.values():
            child.clear()
        self._children.clear()
        self._objects.clear()
        self._exact.clear()
        self._words.clear()

    # -- queries ------------------------------------------------------------

    def get_child(self, key: object) -> PrefixNode[K, T] | None:
        """Resolve ``key`` from this node; ``None`` as soon as a token is missing."""
        node: PrefixNode[K, T] = self
        for token in self._tokenize(key):
            child = node._children.get(self._standardize(token))
            if child is None:
                return None
            node = child
        return node

    def get_objects(self) -> list[T]:
        return self._objects.copy()

    def get_exact_objects(self) -> list[T]:
        return self._exact.copy()

    def get_words(self, key: object = None) -> set:
        if key is None:
            return set(self._words)
        node = self.get_child(key)
        if node is None:
            raise PrefixNotFoundException(f"Prefix '{key}' is not in the index")
        return set(node._words)

    def find(self, key: object) -> list[T]:
        node = self.get_child(key)
        return node.get_objects() if node is not None else []

    def find_exact(self, key: object) -> list[T]:
        node = self.get_child(key)
        return node.get_exact_objects() if node is not None else []

    def get_child_count(self) -> int:
        return len(self._children)

    def iter_children(self) -> Iterator[PrefixNode[K, T]]:
        for token in self._iter_child_keys():
            yield self._children[token]

    def walk(self) -> Iterator[PrefixNode[K, T]]:
        """Depth-first traversal of this subtree, this node first."""
        stack: list[PrefixNode[K, T]] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.iter_children())))

    @property
    def token(self) -> K:
        return self._token

    @property
    def prefix(self) -> object:
        return self._prefix

    def __iter__(self) -> Iterator[T]:
        return iter(self._objects.copy())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._prefix!r}, objects={len(self._objects)})"
