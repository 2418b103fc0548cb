"""Mapping codec between wire messages and typed requests/responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ._errors import GlanceProtocolError
from ._types import (
    AnalyzeRequest,
    AnalyzeResult,
    DocumentKind,
    FindRequest,
    FindResult,
    Granularity,
    Request,
    Response,
    Segment,
    SegmentRequest,
    SegmentResult,
)


def _field(message: Mapping[str, Any], name: str, kind: type) -> Any:
    value = message.get(name)
    # bool is an int subclass but never a valid id
    if not isinstance(value, kind) or isinstance(value, bool):
        raise GlanceProtocolError(
            f"Field {name!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _kind(message: Mapping[str, Any]) -> DocumentKind:
    value = message.get("kind")
    if value is None:
        return DocumentKind.PRIMARY
    return DocumentKind.parse(value)


def _decode_analyze(message: Mapping[str, Any]) -> AnalyzeRequest:
    return AnalyzeRequest(
        id=_field(message, "id", int),
        doc_id=_field(message, "docId", int),
        text=_field(message, "text", str),
        granularity=Granularity.parse(_field(message, "granularity", str)),
        kind=_kind(message),
    )


def _decode_segment(message: Mapping[str, Any]) -> SegmentRequest:
    return SegmentRequest(
        id=_field(message, "id", int),
        doc_id=_field(message, "docId", int),
        granularity=Granularity.parse(_field(message, "granularity", str)),
        kind=_kind(message),
    )


def _decode_find(message: Mapping[str, Any]) -> FindRequest:
    return FindRequest(
        id=_field(message, "id", int),
        doc_id=_field(message, "docId", int),
        query=_field(message, "query", str),
    )


_DECODERS = {
    "analyze": _decode_analyze,
    "segment": _decode_segment,
    "find": _decode_find,
}


def decode_request(message: object) -> Request:
    """Build a typed request from a wire mapping.

    Raises:
        GlanceProtocolError: If the message is not a mapping, has an unknown
            ``type`` or a malformed payload.
    """
    if not isinstance(message, Mapping):
        raise GlanceProtocolError(
            f"Request must be a mapping, got {type(message).__name__}"
        )
    request_type = message.get("type")
    decoder = _DECODERS.get(request_type) if isinstance(request_type, str) else None
    if decoder is None:
        raise GlanceProtocolError(f"Unknown request type {request_type!r}")
    return decoder(message)


def encode_segment(segment: Segment) -> dict[str, Any]:
    return {
        "text": segment.text,
        "startIndex": segment.start_index,
        "wordCount": segment.word_count,
    }


def encode_response(response: Response) -> dict[str, Any]:
    """Plain-dict wire form of a response."""
    if isinstance(response, AnalyzeResult):
        return {
            "id": response.id,
            "type": "analyze-result",
            "docId": response.doc_id,
            "kind": response.kind.value,
            "tokens": list(response.tokens),
            "segments": [encode_segment(s) for s in response.segments],
        }
    if isinstance(response, SegmentResult):
        return {
            "id": response.id,
            "type": "segment-result",
            "docId": response.doc_id,
            "kind": response.kind.value,
            "segments": [encode_segment(s) for s in response.segments],
        }
    if isinstance(response, FindResult):
        return {
            "id": response.id,
            "type": "find-result",
            "docId": response.doc_id,
            "query": response.query,
            "matches": list(response.matches),
        }
    raise TypeError(f"Not a response: {type(response).__name__}")
