"""Engine: resolves typed requests against the document cache."""

from __future__ import annotations

import logging
from typing import Any

from ._cache import DocumentCache
from ._config import EngineConfig
from ._errors import GlanceProtocolError
from ._protocol import decode_request, encode_response
from ._search import find_matches
from ._segmenter import segment_text_by_sentence, segment_text_by_tweet, segment_tokens
from ._types import (
    AnalyzeRequest,
    AnalyzeResult,
    CacheEntry,
    FindRequest,
    FindResult,
    Granularity,
    Request,
    Response,
    Segment,
    SegmentRequest,
    SegmentResult,
)

logger = logging.getLogger(__name__)


class Engine:
    """Single-consumer request processor.

    Requests are handled one at a time and each runs to completion before
    the next, so the cache needs no locking. Every recognized request yields
    exactly one response carrying the request id.
    """

    __slots__ = ("_config", "_cache")

    def __init__(
        self,
        config: EngineConfig | None = None,
        cache: DocumentCache | None = None,
    ) -> None:
        self._config = config if config is not None else EngineConfig()
        self._cache = cache if cache is not None else DocumentCache()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    # -- Operations --

    def segments_for(
        self, entry: CacheEntry, granularity: Granularity | str
    ) -> list[Segment]:
        """Segment a cached document.

        Sentence and tweet segments come from the raw text so that closing
        quotes and whitespace still mark boundaries.
        """
        granularity = Granularity.parse(granularity)
        if granularity is Granularity.SENTENCE:
            return segment_text_by_sentence(entry.text)
        if granularity is Granularity.TWEET:
            return segment_text_by_tweet(entry.text, self._config.tweet_max_chars)
        return segment_tokens(entry.tokens, granularity)

    def analyze(
        self, doc_id: int, text: str, granularity: Granularity | str
    ) -> tuple[list[str], list[Segment]]:
        """Refresh the cache for doc_id and segment it."""
        entry = self._cache.get_entry(doc_id, text)
        if entry is None:
            return [], []
        return list(entry.tokens), self.segments_for(entry, granularity)

    def segment(self, doc_id: int, granularity: Granularity | str) -> list[Segment]:
        """Segment an already analyzed document; [] if it is unknown."""
        entry = self._cache.get_entry(doc_id)
        if entry is None:
            return []
        return self.segments_for(entry, granularity)

    def find(self, doc_id: int, query: str) -> list[int]:
        """Token indices where query starts in an analyzed document."""
        entry = self._cache.get_entry(doc_id)
        if entry is None:
            return []
        return find_matches(entry.normalized_tokens, query)

    def close(self, doc_id: int) -> bool:
        """Forget a document. Returns True if it was cached."""
        return self._cache.discard(doc_id)

    # -- Boundary --

    def handle(self, request: Request) -> Response | None:
        """Answer one typed request."""
        if isinstance(request, AnalyzeRequest):
            tokens, segments = self.analyze(
                request.doc_id, request.text, request.granularity,
            )
            return AnalyzeResult(
                id=request.id, doc_id=request.doc_id, kind=request.kind,
                tokens=tokens, segments=segments,
            )
        if isinstance(request, SegmentRequest):
            return SegmentResult(
                id=request.id, doc_id=request.doc_id, kind=request.kind,
                segments=self.segment(request.doc_id, request.granularity),
            )
        if isinstance(request, FindRequest):
            return FindResult(
                id=request.id, doc_id=request.doc_id, query=request.query,
                matches=self.find(request.doc_id, request.query),
            )
        logger.debug("dropping unsupported request %r", request)
        return None

    def dispatch(self, message: object) -> dict[str, Any] | None:
        """Answer one wire message, or None if it is dropped.

        Messages that are not mappings, carry an unknown type or a malformed
        payload produce no response.
        """
        try:
            request = decode_request(message)
        except GlanceProtocolError as exc:
            logger.debug("dropping message: %s", exc)
            return None
        response = self.handle(request)
        if response is None:
            return None
        return encode_response(response)
