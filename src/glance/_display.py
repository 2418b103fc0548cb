"""Presentation helpers for the reader: pivot letter, pauses and snippets.

These do not touch the document cache. They work on single tokens or on a
token list the caller already holds.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from ._sentence import ends_sentence
from ._tokenizer import _is_word_char, normalize_whitespace
from ._types import SnippetToken

ELLIPSIS_PAUSE_FACTOR = 1.1
MINOR_PAUSE_FACTOR = 0.6

_ELLIPSIS_RE = re.compile(r"\.{3}$")
_MINOR_END_RE = re.compile(r"[;:][\"')\]]*$")


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def pivot_index(word: str) -> int:
    """Index of the character the reader fixates on.

    Leading and trailing punctuation is skipped; the pivot sits roughly a
    quarter into the letters and digits that remain. A word with one core
    character or none pivots on the first character after the leading run.
    """
    if not word:
        return 0
    n = len(word)
    leading = 0
    while leading < n and not _is_word_char(word[leading]):
        leading += 1
    trailing = 0
    while trailing < n - leading and not _is_word_char(word[n - 1 - trailing]):
        trailing += 1

    core = max(0, n - leading - trailing)
    if core <= 1:
        return _clamp(leading, 0, max(0, n - 1))
    pivot = _clamp((core + 2) // 4, 0, core - 1)
    return _clamp(leading + pivot, 0, n - 1)


def sentence_pause_ms(word: str, base_pause_ms: float) -> int:
    """Extra delay after showing word, in milliseconds.

    An ellipsis gets 1.1x the base pause, a sentence end the full base pause
    and a trailing ``;`` or ``:`` 0.6x. Anything else gets no pause. A
    negative base counts as zero.
    """
    trimmed = normalize_whitespace(word)
    if not trimmed:
        return 0
    base = max(0, base_pause_ms)
    if _ELLIPSIS_RE.search(trimmed):
        return _round_half_up(base * ELLIPSIS_PAUSE_FACTOR)
    if ends_sentence(trimmed):
        return _round_half_up(base)
    if _MINOR_END_RE.search(trimmed):
        return _round_half_up(base * MINOR_PAUSE_FACTOR)
    return 0


def build_snippet(
    tokens: Sequence[str], active_index: int, radius: int
) -> list[SnippetToken]:
    """Tokens within radius of active_index, with the active one flagged.

    The window is clipped to the token list.
    """
    n = len(tokens)
    start = _clamp(active_index - radius, 0, max(0, n - 1))
    end = _clamp(active_index + radius + 1, 0, n)
    return [
        SnippetToken(text=token, is_active=start + offset == active_index)
        for offset, token in enumerate(tokens[start:end])
    ]
