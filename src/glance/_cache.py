"""Per-document memo of tokenization results."""

from __future__ import annotations

import logging

from ._tokenizer import normalize_token, tokenize
from ._types import CacheEntry

logger = logging.getLogger(__name__)


def build_entry(text: str) -> CacheEntry:
    """Tokenize text and normalize its tokens in one pass."""
    tokens = tokenize(text)
    return CacheEntry(
        text=text,
        tokens=tuple(tokens),
        normalized_tokens=tuple(normalize_token(t) for t in tokens),
    )


class DocumentCache:
    """One CacheEntry per document id, replaced wholesale on new text.

    The cache never evicts on its own; hosts call discard() when a document
    is closed.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, CacheEntry] = {}

    def get_entry(self, doc_id: int, text: str | None = None) -> CacheEntry | None:
        """Return the entry for doc_id, rebuilding it when text changed.

        Returns None when no entry exists and no text was supplied.
        """
        existing = self._entries.get(doc_id)
        if existing is not None and (text is None or existing.text == text):
            logger.debug("cache hit for doc %s", doc_id)
            return existing
        if text is None:
            logger.debug("cache miss for doc %s with no text", doc_id)
            return None

        entry = build_entry(text)
        self._entries[doc_id] = entry
        logger.debug(
            "cache %s for doc %s: %d tokens",
            "rebuild" if existing is not None else "fill",
            doc_id, len(entry.tokens),
        )
        return entry

    def discard(self, doc_id: int) -> bool:
        """Drop the entry for doc_id. Returns True if one existed."""
        return self._entries.pop(doc_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
