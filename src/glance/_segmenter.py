"""Segment a token stream or raw text at a display granularity."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from ._sentence import ends_sentence, split_sentences
from ._tokenizer import tokenize
from ._types import Granularity, Segment

DEFAULT_TWEET_CHARS = 280

_WINDOW_SIZES = {Granularity.BIGRAM: 2, Granularity.TRIGRAM: 3}

# (start_index, tokens, text) of one packable unit: a sentence or a token.
_Unit = tuple[int, Sequence[str], str]


def _make_segment(tokens: Sequence[str], start_index: int) -> Segment:
    return Segment(
        text=" ".join(tokens), start_index=start_index, word_count=len(tokens),
    )


def _windows(tokens: Sequence[str], size: int) -> list[Segment]:
    """Fixed non-overlapping windows; the last one may be short."""
    return [
        _make_segment(tokens[i : i + size], i)
        for i in range(0, len(tokens), size)
    ]


def _token_sentences(tokens: Sequence[str]) -> list[_Unit]:
    """Group tokens into sentences using the end-of-token punctuation rule."""
    units: list[_Unit] = []
    buffer: list[str] = []
    start = 0
    for i, token in enumerate(tokens):
        if not buffer:
            start = i
        buffer.append(token)
        if ends_sentence(token):
            units.append((start, buffer, " ".join(buffer)))
            buffer = []
    if buffer:
        units.append((start, buffer, " ".join(buffer)))
    return units


def _text_sentences(text: str) -> list[_Unit]:
    """Split raw text into sentences and re-tokenize each one.

    start_index is the running token count over all previous sentences.
    """
    units: list[_Unit] = []
    offset = 0
    for sentence in split_sentences(text):
        sentence_tokens = tokenize(sentence)
        if not sentence_tokens:
            continue
        units.append((offset, sentence_tokens, " ".join(sentence_tokens)))
        offset += len(sentence_tokens)
    return units


class _TweetPacker:
    """Greedy length-bounded packer.

    Every unit is offered to an ordered chain of tiers; the first tier that
    accepts it wins. Sentences fall back to token splitting, tokens fall back
    to a hard overflow segment of their own.
    """

    __slots__ = ("max_chars", "segments", "_start", "_tokens", "_text")

    def __init__(self, max_chars: int) -> None:
        if max_chars < 1:
            raise ValueError(f"max_chars must be >= 1, got {max_chars}")
        self.max_chars = max_chars
        self.segments: list[Segment] = []
        self._start = 0
        self._tokens: list[str] = []
        self._text = ""

    def pack(self, units: Iterable[_Unit], tiers: Sequence[_Tier]) -> None:
        for unit in units:
            for tier in tiers:
                if tier(self, unit):
                    break

    def flush(self) -> None:
        if self._tokens:
            self.segments.append(Segment(
                text=self._text,
                start_index=self._start,
                word_count=len(self._tokens),
            ))
        self._tokens = []
        self._text = ""

    # -- Tiers --

    def _append(self, unit: _Unit) -> bool:
        """Add the unit to a non-empty buffer if the joined text still fits."""
        _, tokens, text = unit
        if not self._tokens:
            return False
        if len(self._text) + 1 + len(text) > self.max_chars:
            return False
        self._tokens.extend(tokens)
        self._text = f"{self._text} {text}"
        return True

    def _restart(self, unit: _Unit) -> bool:
        """Flush and open a fresh buffer with the unit if it fits alone."""
        start, tokens, text = unit
        if len(text) > self.max_chars:
            return False
        self.flush()
        self._start = start
        self._tokens = list(tokens)
        self._text = text
        return True

    def _split(self, unit: _Unit) -> bool:
        """Pack an oversized sentence token by token, isolated from its neighbours."""
        start, tokens, _ = unit
        self.flush()
        self.pack(
            ((start + i, (token,), token) for i, token in enumerate(tokens)),
            _TOKEN_TIERS,
        )
        self.flush()
        return True

    def _overflow(self, unit: _Unit) -> bool:
        """Emit a unit longer than max_chars verbatim as its own segment."""
        start, tokens, text = unit
        self.flush()
        self.segments.append(Segment(
            text=text, start_index=start, word_count=len(tokens),
        ))
        return True


_Tier = Callable[[_TweetPacker, _Unit], bool]

_SENTENCE_TIERS: tuple[_Tier, ...] = (
    _TweetPacker._append, _TweetPacker._restart, _TweetPacker._split,
)
_TOKEN_TIERS: tuple[_Tier, ...] = (
    _TweetPacker._append, _TweetPacker._restart, _TweetPacker._overflow,
)


def _pack_tweets(units: Iterable[_Unit], max_chars: int) -> list[Segment]:
    packer = _TweetPacker(max_chars)
    packer.pack(units, _SENTENCE_TIERS)
    packer.flush()
    return packer.segments


def segment_tokens(
    tokens: Sequence[str], granularity: Granularity | str
) -> list[Segment]:
    """Group a token sequence into segments.

    ``sentence`` uses the end-of-token punctuation rule. ``tweet`` packs those
    token sentences into chunks of at most DEFAULT_TWEET_CHARS characters.
    """
    granularity = Granularity.parse(granularity)
    if not tokens:
        return []

    if granularity is Granularity.WORD:
        return [
            Segment(text=token, start_index=i, word_count=1)
            for i, token in enumerate(tokens)
        ]
    if granularity in _WINDOW_SIZES:
        return _windows(tokens, _WINDOW_SIZES[granularity])

    units = _token_sentences(tokens)
    if granularity is Granularity.SENTENCE:
        return [_make_segment(unit_tokens, start) for start, unit_tokens, _ in units]
    return _pack_tweets(units, DEFAULT_TWEET_CHARS)


def segment_text_by_sentence(text: str) -> list[Segment]:
    """Sentence segments derived from the raw text punctuation."""
    return [
        _make_segment(unit_tokens, start)
        for start, unit_tokens, _ in _text_sentences(text)
    ]


def segment_text_by_tweet(
    text: str, max_chars: int = DEFAULT_TWEET_CHARS
) -> list[Segment]:
    """Pack whole sentences into chunks of at most max_chars characters.

    A sentence longer than max_chars is split token by token; a single token
    longer than max_chars is emitted alone and never truncated.

    Raises:
        ValueError: If max_chars is less than 1.
    """
    return _pack_tweets(_text_sentences(text), max_chars)
