"""Case-insensitive character radix trie."""

from __future__ import annotations

from typing import Iterable, TypeVar

from .base import PrefixNode

T = TypeVar("T")

ROOT_CHARACTER = "\x00"


def standardize(text: str) -> str:
    return text.lower()


class RadixObjectNode(PrefixNode[str, T]):
    """Node for one character; ``prefix`` is the lower-cased path from the root."""

    def __init__(self, character: str, prefix: str) -> None:
        super().__init__(character, standardize(prefix))

    def _tokenize(self, key: object) -> Iterable[str]:
        return standardize(str(key))

    def _standardize(self, token: str) -> str:
        return standardize(token)

    def _extend_prefix(self, token: str) -> str:
        return self._prefix + token

    def _new_child(self, token: str, prefix: object) -> RadixObjectNode[T]:
        return RadixObjectNode(token, prefix)

    @property
    def character(self) -> str:
        return self._token

    @property
    def prefix(self) -> str:
        return self._prefix

    def __str__(self) -> str:
        return self._token


class RadixObjectDb(RadixObjectNode[T]):
    """Root of a radix trie."""

    def __init__(self) -> None:
        super().__init__(ROOT_CHARACTER, "")

    @classmethod
    def create(cls) -> RadixObjectDb[T]:
        return cls()
