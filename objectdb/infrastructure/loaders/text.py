"""Keyword extraction from free text."""

from __future__ import annotations

import re

_WORD_BREAK_RE = re.compile(r"[;,.':\"?()\[\]{}_+\-=]")
_SPACES_RE = re.compile(r"\s+")


def keywords(sentence: str) -> list[str]:
    """Split a sentence into unique words, keeping first-seen order.

    Punctuation counts as a word break, so ``"DLBCL-2040 (ABC)"`` yields
    ``["DLBCL", "2040", "ABC"]``.
    """
    s = _WORD_BREAK_RE.sub(" ", sentence)
    s = _SPACES_RE.sub(" ", s).strip()
    if not s:
        return []
    return list(dict.fromkeys(s.split(" ")))
