"""Token bookkeeping for documents extracted page by page."""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Sequence
from itertools import accumulate

from ._tokenizer import tokenize
from ._types import PageRange, RangeText

PAGE_SEPARATOR = "\n\n"


def page_token_counts(page_texts: Sequence[str]) -> list[int]:
    """Number of tokens on each page."""
    return [len(tokenize(text)) for text in page_texts]


def page_offsets(page_texts: Sequence[str]) -> list[int]:
    """Token index at which each page starts when pages are read in order."""
    counts = page_token_counts(page_texts)
    return list(accumulate(counts[:-1], initial=0)) if counts else []


def page_index_for_token(offsets: Sequence[int], token_index: int) -> int | None:
    """Index of the page holding token_index, given sorted offsets.

    Empty pages share their offset with the next page; the last such page
    wins. A negative token_index maps to page 0.
    """
    if not offsets:
        return None
    return max(0, bisect_right(offsets, token_index) - 1)


def _page_number(value: float | None, default: int) -> int:
    # Missing, zero and NaN all fall back to the default.
    if not value or math.isnan(value):
        return default
    return math.floor(value)


def normalize_range(
    start: float | None, end: float | None, page_count: int
) -> PageRange:
    """Clamp a 1-based inclusive page range to a document of page_count pages.

    A missing start means page 1 and a missing end means the last page. The
    end never precedes the start. With no pages at all the range is (1, 1).
    """
    safe_start = min(max(1, page_count), max(1, _page_number(start, 1)))
    safe_end = min(
        max(safe_start, page_count),
        max(safe_start, _page_number(end, page_count)),
    )
    return PageRange(start=safe_start, end=safe_end)


def build_range_text(
    page_texts: Sequence[str],
    page_token_counts: Sequence[int],
    start: int,
    end: int,
) -> RangeText:
    """Join pages start..end (1-based, inclusive) into one readable text.

    Offsets give the token index of each included page within the joined
    text. A page without a count contributes no tokens to later offsets.
    """
    start_index = max(0, start - 1)
    end_index = min(len(page_texts) - 1, end - 1)
    offsets: list[int] = []
    offset = 0
    for i in range(start_index, end_index + 1):
        offsets.append(offset)
        if i < len(page_token_counts):
            offset += page_token_counts[i] or 0
    return RangeText(
        text=PAGE_SEPARATOR.join(page_texts[start_index:end_index + 1]),
        offsets=tuple(offsets),
    )
