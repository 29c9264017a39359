"""Trees that map a path to exactly one value."""

from __future__ import annotations

from typing import Generic, TypeVar

from objectdb.domain.path import Path

from .tree import ROOT_NAME, Generation, TreeDb, TreeNode

T = TypeVar("T")


class TextObjectNode(TreeNode["TextObjectNode[T]"], Generic[T]):
    def __init__(self, name: str, generation: Generation | None = None) -> None:
        super().__init__(name, generation)
        self._value: T | None = None

    @property
    def value(self) -> T | None:
        return self._value

    def get_value(self) -> T | None:
        return self._value

    def set_value(self, value: T | None) -> None:
        self._value = value

    def _clear_payload(self) -> None:
        self._value = None


class TextObjectDb(TreeDb[TextObjectNode[T]]):
    def __init__(self) -> None:
        super().__init__(TextObjectNode(ROOT_NAME))

    def set_value(self, path: str | Path, value: T | None) -> TextObjectNode[T]:
        node = self.get_child_by_path(path)
        node.set_value(value)
        return node

    def get_value(self, path: str | Path) -> T | None:
        node = self.lookup(path)
        return node.value if node is not None else None
