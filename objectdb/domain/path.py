"""Immutable hierarchical paths used as category keys.

A path is a sequence of levels parsed from a delimited string. Both ``/`` and
``.`` separate levels and empty segments are dropped, so ``"/a/b.c"`` and
``"a.b/c"`` name the same levels. ``StrictPath`` additionally sanitizes every
level so it can be used as a stable category key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Iterator

PATH_DELIMITER = "/"
PERIOD_DELIMITER = "."

_SPLIT_RE = re.compile(r"[./]")
_SLASH_RE = re.compile(r"[/\\]")
_BRACKET_RE = re.compile(r"[\[\](){}]")
_SPACES_RE = re.compile(r"\s+")
_LEADING_UNDERSCORES_RE = re.compile(r"^_+")
_TRAILING_UNDERSCORES_RE = re.compile(r"_+$")
_ILLEGAL_RE = re.compile(r"[^a-zA-Z0-9\-_.]")
_UNDERSCORES_RE = re.compile(r"_+")


def sanitize_level(level: str) -> str:
    """A level cannot contain slashes."""
    return _SLASH_RE.sub("", level)


def sanitize_strict_level(level: str) -> str:
    """Normalize a level to ``[A-Za-z0-9-_.]`` with single underscores.

    ``"Q3 (draft)"`` becomes ``"Q3_draft"``.
    """
    s = _SLASH_RE.sub("", level)
    s = _BRACKET_RE.sub(" ", s)
    s = _SPACES_RE.sub("_", s)
    s = _LEADING_UNDERSCORES_RE.sub("", s)
    s = _TRAILING_UNDERSCORES_RE.sub("", s)
    s = _ILLEGAL_RE.sub("", s)
    return _UNDERSCORES_RE.sub("_", s)


@total_ordering
@dataclass(frozen=True, init=False, repr=False, eq=False)
class Path:
    """Sequence of path levels with structural equality.

    Parts may be delimited strings, other paths or arbitrary objects (their
    ``str()`` is parsed). A leading ``/`` on the first string part, or a
    rooted first path, marks the result as rooted; rooting only affects
    rendering, never equality.
    """

    levels: tuple[str, ...]
    rooted: bool = False

    _sanitizer: ClassVar = staticmethod(sanitize_level)

    def __init__(self, *parts: object, rooted: bool = False) -> None:
        levels: list[str] = []
        for i, part in enumerate(parts):
            if part is None:
                continue
            if isinstance(part, Path):
                if i == 0 and part.rooted:
                    rooted = True
                for level in part.levels:
                    levels.extend(self._parse(level))
                continue
            text = str(part)
            if i == 0 and text.startswith(PATH_DELIMITER):
                rooted = True
            levels.extend(self._parse(text))
        object.__setattr__(self, "levels", tuple(levels))
        object.__setattr__(self, "rooted", rooted)

    @classmethod
    def _parse(cls, text: str) -> list[str]:
        result: list[str] = []
        for segment in _SPLIT_RE.split(text):
            level = cls._sanitizer(segment)
            if level:
                result.append(level)
        return result

    @property
    def path(self) -> str:
        prefix = PATH_DELIMITER if self.rooted else ""
        return prefix + PATH_DELIMITER.join(self.levels)

    @property
    def period_path(self) -> str:
        return PERIOD_DELIMITER.join(self.levels)

    @property
    def name(self) -> str | None:
        return self.levels[-1] if self.levels else None

    @property
    def parent(self) -> Path | None:
        if not self.levels:
            return None
        return type(self)(*self.levels[:-1], rooted=self.rooted)

    def append(self, *levels: object) -> Path:
        return type(self)(self, *levels, rooted=self.rooted)

    def level(self, i: int) -> str:
        return self.levels[i]

    def is_empty(self) -> bool:
        return len(self.levels) == 0

    def __iter__(self) -> Iterator[str]:
        return iter(self.levels)

    def __len__(self) -> int:
        return len(self.levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.levels == other.levels

    def __hash__(self) -> int:
        return hash(self.levels)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.levels < other.levels

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class StrictPath(Path):
    """Path whose levels are sanitized with :func:`sanitize_strict_level`."""

    _sanitizer: ClassVar = staticmethod(sanitize_strict_level)


class RootPath(Path):
    def __init__(self, *parts: object, rooted: bool = True) -> None:
        super().__init__(*parts, rooted=True)


def as_strict_path(path: str | Path) -> StrictPath:
    """Category key for ``path``: strict paths pass through, anything else is re-sanitized."""
    if isinstance(path, StrictPath):
        return path
    return StrictPath(path)
