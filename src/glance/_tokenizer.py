"""Whitespace tokenizer with bracket merging, and search normalization."""

from __future__ import annotations

import re
from collections.abc import Sequence

# ECMAScript whitespace set: excludes \x1c-\x1f and \x85, includes \ufeff.
_WHITESPACE_RE = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)

# Tried in order; the first pair that merges wins.
BRACKET_PAIRS: tuple[tuple[str, str], ...] = (
    ("[", "]"),
    ("(", ")"),
    ("{", "}"),
    ("<", ">"),
)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip(" ")


def _merge_at(tokens: Sequence[str], i: int) -> tuple[str, int] | None:
    """Try every bracket pair at position i.

    Returns (merged_token, n_consumed) or None when no pair merges.
    """
    token = tokens[i]
    nxt = tokens[i + 1] if i + 1 < len(tokens) else ""
    after = tokens[i + 2] if i + 2 < len(tokens) else None

    for open_, close in BRACKET_PAIRS:
        if token == open_ and nxt:
            # "(", "word", ")" -> "(word)"
            if after == close:
                return f"{open_}{nxt}{close}", 3
            # "(", "word)" -> "(word)"
            if nxt.endswith(close):
                return f"{open_}{nxt}", 2
        if token != open_ and token.startswith(open_) and not token.endswith(close):
            # "(word", ")" -> "(word)"
            if nxt == close:
                return f"{token}{close}", 2
    return None


def merge_bracketed_tokens(tokens: Sequence[str]) -> list[str]:
    """Glue stray bracket characters onto their neighbours.

    Keeps display units such as ``(word)``, ``[1]`` or ``<tag>`` atomic when
    the source text had spaces inside the brackets. Malformed nesting is left
    untouched.
    """
    merged: list[str] = []
    i = 0
    n = len(tokens)
    while i < n:
        hit = _merge_at(tokens, i)
        if hit is None:
            merged.append(tokens[i])
            i += 1
        else:
            merged.append(hit[0])
            i += hit[1]
    return merged


def tokenize(text: str) -> list[str]:
    """Split text into display tokens."""
    normalized = normalize_whitespace(text)
    if not normalized:
        return []
    return merge_bracketed_tokens(normalized.split(" "))


def _is_word_char(ch: str) -> bool:
    # Any Unicode letter or number category.
    return ch.isalpha() or ch.isnumeric()


def normalize_token(token: str) -> str:
    """Lower-case a token and strip edge characters that are not letters or digits."""
    value = token.lower()
    start = 0
    end = len(value)
    while start < end and not _is_word_char(value[start]):
        start += 1
    while end > start and not _is_word_char(value[end - 1]):
        end -= 1
    return value[start:end]


def normalize_query(query: str) -> list[str]:
    """Tokenize and normalize a search query, dropping empty tokens."""
    normalized = (normalize_token(t) for t in tokenize(query))
    return [t for t in normalized if t]
