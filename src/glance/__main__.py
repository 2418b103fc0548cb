"""Run the engine as a msgpack worker on stdin/stdout."""

from __future__ import annotations

import argparse
import logging
import sys

from ._config import EngineConfig
from ._engine import Engine
from ._errors import GlanceConfigError
from ._worker import serve


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="glance",
        description="Serve tokenize/segment/find requests over msgpack on stdin/stdout.",
    )
    parser.add_argument(
        "--max-chars", type=int, default=EngineConfig().tweet_max_chars,
        help="Maximum characters per tweet segment (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = EngineConfig(tweet_max_chars=args.max_chars)
    except GlanceConfigError as exc:
        parser.error(str(exc))

    serve(sys.stdin.buffer, sys.stdout.buffer, Engine(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
