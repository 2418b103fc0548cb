"""Glance: tokenizing, segmenting and search engine for speed reading."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ._cache import DocumentCache
from ._config import EngineConfig
from ._display import build_snippet, pivot_index, sentence_pause_ms
from ._engine import Engine
from ._errors import GlanceConfigError, GlanceError, GlanceProtocolError
from ._pages import (
    build_range_text,
    normalize_range,
    page_index_for_token,
    page_offsets,
    page_token_counts,
)
from ._protocol import decode_request, encode_response
from ._search import find_matches
from ._segmenter import (
    DEFAULT_TWEET_CHARS,
    segment_text_by_sentence,
    segment_text_by_tweet,
    segment_tokens,
)
from ._sentence import ends_sentence, split_sentences
from ._tokenizer import merge_bracketed_tokens, normalize_token, tokenize
from ._types import (
    AnalyzeRequest,
    AnalyzeResult,
    CacheEntry,
    DocumentKind,
    FindRequest,
    FindResult,
    Granularity,
    PageRange,
    RangeText,
    Segment,
    SegmentRequest,
    SegmentResult,
    SnippetToken,
)
from ._worker import serve

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create_engine",
    "AnalyzeRequest",
    "AnalyzeResult",
    "CacheEntry",
    "DEFAULT_TWEET_CHARS",
    "DocumentCache",
    "DocumentKind",
    "Engine",
    "EngineConfig",
    "FindRequest",
    "FindResult",
    "GlanceConfigError",
    "GlanceError",
    "GlanceProtocolError",
    "Granularity",
    "PageRange",
    "RangeText",
    "Segment",
    "SegmentRequest",
    "SegmentResult",
    "SnippetToken",
    "build_range_text",
    "build_snippet",
    "decode_request",
    "encode_response",
    "ends_sentence",
    "find_matches",
    "merge_bracketed_tokens",
    "normalize_range",
    "normalize_token",
    "page_index_for_token",
    "page_offsets",
    "page_token_counts",
    "pivot_index",
    "segment_text_by_sentence",
    "segment_text_by_tweet",
    "segment_tokens",
    "sentence_pause_ms",
    "serve",
    "split_sentences",
    "tokenize",
]


def create_engine(config: EngineConfig | None = None, **overrides: Any) -> Engine:
    """Return a ready-to-use Engine with an empty cache.

    Args:
        config: Base configuration. Defaults to EngineConfig().
        **overrides: EngineConfig fields to replace, e.g. tweet_max_chars=140.
    """
    if config is None:
        config = EngineConfig(**overrides)
    elif overrides:
        config = replace(config, **overrides)
    return Engine(config)
