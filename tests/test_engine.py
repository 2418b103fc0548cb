"""Tests for the engine: operations, typed requests and wire dispatch."""

import logging

import pytest

import glance
from glance import (
    AnalyzeRequest,
    AnalyzeResult,
    DocumentKind,
    EngineConfig,
    FindRequest,
    FindResult,
    GlanceConfigError,
    Granularity,
    Segment,
    SegmentRequest,
    SegmentResult,
)


def test_analyze_returns_tokens_and_segments(engine):
    tokens, segments = engine.analyze(1, "one two three four five", "bigram")
    assert tokens == ["one", "two", "three", "four", "five"]
    assert [s.text for s in segments] == ["one two", "three four", "five"]


def test_analyze_empty_text(engine):
    assert engine.analyze(1, "   ", Granularity.WORD) == ([], [])


def test_segment_before_analyze(engine):
    assert engine.segment(1, Granularity.WORD) == []


def test_find_before_analyze(engine):
    assert engine.find(1, "anything") == []


def test_find_after_analyze(engine):
    engine.analyze(3, "Focus on reading speed", Granularity.WORD)
    assert engine.find(3, "read") == [2]


def test_cache_coherence(engine):
    engine.analyze(1, "first version of the text", Granularity.WORD)
    engine.analyze(1, "second draft", Granularity.WORD)
    segments = engine.segment(1, Granularity.WORD)
    assert [s.text for s in segments] == ["second", "draft"]


def test_cache_reuse(engine, sample_text):
    tokens, _ = engine.analyze(1, sample_text, Granularity.WORD)
    trigrams = engine.segment(1, Granularity.TRIGRAM)
    assert sum(s.word_count for s in trigrams) == len(tokens)
    assert " ".join(s.text for s in trigrams) == " ".join(tokens)


def test_sentence_granularity_uses_raw_text(engine):
    engine.analyze(1, "She said “stop.” Then left.", Granularity.WORD)
    segments = engine.segment(1, Granularity.SENTENCE)
    assert segments == [
        Segment("She said “stop.”", 0, 3),
        Segment("Then left.", 3, 2),
    ]


def test_tweet_granularity_uses_config():
    engine = glance.create_engine(tweet_max_chars=35)
    text = "First sentence here. Second sentence there. Third sentence now."
    _, segments = engine.analyze(1, text, Granularity.TWEET)
    assert len(segments) == 3

    roomy = glance.create_engine()
    _, segments = roomy.analyze(1, text, Granularity.TWEET)
    assert segments == [Segment(text, 0, 9)]


def test_documents_do_not_interfere(engine):
    engine.analyze(1, "alpha beta", Granularity.WORD)
    engine.analyze(2, "gamma", Granularity.WORD)
    assert engine.find(1, "gamma") == []
    assert engine.find(2, "gamma") == [0]


def test_close(engine):
    engine.analyze(1, "alpha beta", Granularity.WORD)
    assert engine.close(1) is True
    assert engine.segment(1, Granularity.WORD) == []
    assert engine.close(1) is False


# -- Typed requests --


def test_handle_analyze(engine):
    response = engine.handle(AnalyzeRequest(
        id=10, doc_id=4, text="Hello world.", granularity=Granularity.WORD,
        kind=DocumentKind.SECONDARY,
    ))
    assert isinstance(response, AnalyzeResult)
    assert response.id == 10
    assert response.doc_id == 4
    assert response.kind is DocumentKind.SECONDARY
    assert response.tokens == ["Hello", "world."]
    assert len(response.segments) == 2


def test_handle_segment(engine):
    engine.handle(AnalyzeRequest(
        id=1, doc_id=4, text="a b c", granularity=Granularity.WORD,
    ))
    response = engine.handle(SegmentRequest(
        id=2, doc_id=4, granularity=Granularity.BIGRAM,
    ))
    assert isinstance(response, SegmentResult)
    assert response.id == 2
    assert response.kind is DocumentKind.PRIMARY
    assert [s.text for s in response.segments] == ["a b", "c"]


def test_handle_find(engine):
    engine.handle(AnalyzeRequest(
        id=1, doc_id=4, text="Focus on reading", granularity=Granularity.WORD,
    ))
    response = engine.handle(FindRequest(id=5, doc_id=4, query="on"))
    assert response == FindResult(id=5, doc_id=4, query="on", matches=[1])


def test_handle_unknown_object(engine):
    assert engine.handle("analyze") is None


# -- Wire dispatch --


def test_dispatch_analyze(engine):
    response = engine.dispatch({
        "id": 1, "type": "analyze", "docId": 9,
        "text": "one two three", "granularity": "bigram",
    })
    assert response == {
        "id": 1,
        "type": "analyze-result",
        "docId": 9,
        "kind": "primary",
        "tokens": ["one", "two", "three"],
        "segments": [
            {"text": "one two", "startIndex": 0, "wordCount": 2},
            {"text": "three", "startIndex": 2, "wordCount": 1},
        ],
    }


def test_dispatch_segment_and_find(engine):
    engine.dispatch({
        "id": 1, "type": "analyze", "docId": 9, "kind": "secondary",
        "text": "Focus on reading speed", "granularity": "word",
    })
    segment = engine.dispatch({
        "id": 2, "type": "segment", "docId": 9, "kind": "secondary",
        "granularity": "trigram",
    })
    assert segment["type"] == "segment-result"
    assert segment["kind"] == "secondary"
    assert [s["text"] for s in segment["segments"]] == ["Focus on reading", "speed"]

    found = engine.dispatch({"id": 3, "type": "find", "docId": 9, "query": "read"})
    assert found == {
        "id": 3, "type": "find-result", "docId": 9, "query": "read", "matches": [2],
    }


def test_dispatch_segment_unknown_doc(engine):
    response = engine.dispatch({
        "id": 4, "type": "segment", "docId": 77, "granularity": "word",
    })
    assert response["segments"] == []


@pytest.mark.parametrize("message", [
    None,
    "analyze",
    42,
    ["analyze"],
    {},
    {"id": 1, "type": "paragraph", "docId": 1},
    {"id": 1, "type": ["analyze"], "docId": 1},
    {"id": 1, "type": "analyze", "docId": 1, "granularity": "word"},
    {"id": 1, "type": "analyze", "docId": 1, "text": 5, "granularity": "word"},
    {"id": 1, "type": "analyze", "docId": 1, "text": "x", "granularity": "page"},
    {"id": True, "type": "find", "docId": 1, "query": "x"},
    {"id": 1, "type": "find", "docId": "1", "query": "x"},
    {"id": 1, "type": "find", "docId": 1},
    {"id": 1, "type": "segment", "docId": 1, "granularity": "word", "kind": "third"},
])
def test_dispatch_drops_malformed(engine, message):
    assert engine.dispatch(message) is None


def test_dropped_message_logged(engine, caplog):
    with caplog.at_level(logging.DEBUG, logger="glance._engine"):
        engine.dispatch({"type": "bogus"})
    assert any("dropping message" in r.getMessage() for r in caplog.records)


# -- Configuration --


def test_config_validation():
    with pytest.raises(GlanceConfigError):
        EngineConfig(tweet_max_chars=0)
    with pytest.raises(ValueError):
        EngineConfig(tweet_max_chars=-5)
    with pytest.raises(GlanceConfigError):
        EngineConfig(tweet_max_chars=True)


def test_create_engine_overrides():
    base = EngineConfig(tweet_max_chars=100)
    assert glance.create_engine(base).config.tweet_max_chars == 100
    assert glance.create_engine(base, tweet_max_chars=50).config.tweet_max_chars == 50
    assert glance.create_engine().config.tweet_max_chars == glance.DEFAULT_TWEET_CHARS
