"""Punctuation-based sentence boundaries.

Two separate heuristics live here. ``ends_sentence`` looks at a single token
and is used when only the token stream is available. ``split_sentences``
scans the raw text, where closing quotes and the following whitespace are
still visible. They can disagree on edge cases and are kept apart.
"""

from __future__ import annotations

import re

from ._tokenizer import normalize_whitespace

# Terminal punctuation, then any closing quotes/brackets, at the end of a token.
_TOKEN_END_RE = re.compile(r"[.!?][\"')\]]*$")

# Terminal punctuation and closing marks (curly quotes included) followed by
# a space or the end of the string. Input is already whitespace-normalized.
_SENTENCE_END_RE = re.compile(r"[.!?][\"')\]”’]*(?= |$)")


def ends_sentence(token: str) -> bool:
    """True if the token closes a sentence."""
    return _TOKEN_END_RE.search(token) is not None


def split_sentences(text: str) -> list[str]:
    """Split text into sentences; an unterminated tail is its own sentence."""
    normalized = normalize_whitespace(text)
    if not normalized:
        return []

    sentences: list[str] = []
    last = 0
    for m in _SENTENCE_END_RE.finditer(normalized):
        s = normalized[last:m.end()].strip(" ")
        if s:
            sentences.append(s)
        last = m.end()

    tail = normalized[last:].strip(" ")
    if tail:
        sentences.append(tail)
    return sentences
