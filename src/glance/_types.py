"""Data structures for glance."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ._errors import GlanceProtocolError


class Granularity(str, Enum):
    WORD = "word"
    BIGRAM = "bigram"
    TRIGRAM = "trigram"
    SENTENCE = "sentence"
    TWEET = "tweet"

    @classmethod
    def parse(cls, value: Granularity | str) -> Granularity:
        """Resolve an enum member or its string value."""
        try:
            return cls(value)
        except ValueError:
            raise GlanceProtocolError(f"Unknown granularity {value!r}") from None


class DocumentKind(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"   # parallel text shown beside the primary one

    @classmethod
    def parse(cls, value: DocumentKind | str) -> DocumentKind:
        try:
            return cls(value)
        except ValueError:
            raise GlanceProtocolError(f"Unknown document kind {value!r}") from None


@dataclass(slots=True, frozen=True)
class Segment:
    text: str
    start_index: int    # token index, not character offset
    word_count: int


@dataclass(slots=True, frozen=True)
class CacheEntry:
    text: str
    tokens: tuple[str, ...]
    normalized_tokens: tuple[str, ...]   # parallel to tokens, may hold ""


@dataclass(slots=True, frozen=True)
class SnippetToken:
    text: str
    is_active: bool


@dataclass(slots=True, frozen=True)
class PageRange:
    start: int   # 1-based, inclusive
    end: int     # 1-based, inclusive


@dataclass(slots=True, frozen=True)
class RangeText:
    text: str
    offsets: tuple[int, ...]   # token offset of each page within text


@dataclass(slots=True, frozen=True)
class AnalyzeRequest:
    id: int
    doc_id: int
    text: str
    granularity: Granularity
    kind: DocumentKind = DocumentKind.PRIMARY


@dataclass(slots=True, frozen=True)
class SegmentRequest:
    id: int
    doc_id: int
    granularity: Granularity
    kind: DocumentKind = DocumentKind.PRIMARY


@dataclass(slots=True, frozen=True)
class FindRequest:
    id: int
    doc_id: int
    query: str


@dataclass(slots=True, frozen=True)
class AnalyzeResult:
    id: int
    doc_id: int
    kind: DocumentKind
    tokens: list[str] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class SegmentResult:
    id: int
    doc_id: int
    kind: DocumentKind
    segments: list[Segment] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class FindResult:
    id: int
    doc_id: int
    query: str
    matches: list[int] = field(default_factory=list)


Request = Union[AnalyzeRequest, SegmentRequest, FindRequest]
Response = Union[AnalyzeResult, SegmentResult, FindResult]
