"""msgpack stream worker: one request in, at most one response out."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

import msgpack

from ._engine import Engine

logger = logging.getLogger(__name__)

_READ_SIZE = 65536


def _as_message(obj: Any) -> Any:
    """Rebuild a dict from decoded map pairs; other values pass through.

    Maps are decoded as tuples of (key, value) pairs so that a frame with
    unhashable keys is still consumed whole.

    Raises:
        TypeError: If a map key is unhashable.
    """
    if isinstance(obj, tuple):
        return dict(obj)
    return obj


def serve(
    instream: BinaryIO, outstream: BinaryIO, engine: Engine | None = None
) -> int:
    """Answer msgpack-encoded requests from instream until it is exhausted.

    Requests are processed strictly in arrival order. Each response is
    written and flushed before the next request is read. A frame that decodes
    but is not a valid request is dropped. Bytes that are not msgpack at all
    leave the stream unsynchronized, so serving stops there. Returns the
    number of responses written.
    """
    if engine is None:
        engine = Engine()
    unpacker = msgpack.Unpacker(
        instream,
        raw=False,
        strict_map_key=False,
        object_pairs_hook=tuple,
        unicode_errors="replace",
        read_size=_READ_SIZE,
    )
    packer = msgpack.Packer(use_bin_type=True)

    written = 0
    while True:
        try:
            obj = next(unpacker)
        except StopIteration:
            break
        except ValueError as exc:
            logger.warning("undecodable input after %d responses: %s", written, exc)
            break

        try:
            message = _as_message(obj)
        except TypeError as exc:
            logger.debug("dropping frame with unhashable map key: %s", exc)
            continue

        response = engine.dispatch(message)
        if response is None:
            continue
        outstream.write(packer.pack(response))
        outstream.flush()
        written += 1

    logger.debug("input exhausted after %d responses", written)
    return written
