#!/usr/bin/env python3
"""Feed a markdown file through the streaming parser in fixed-size chunks.

Usage:
    python3 scripts/stream_markdown_events.py --input README.md
    python3 scripts/stream_markdown_events.py --input README.md --chunk-size 7 --jsonl
    python3 scripts/stream_markdown_events.py --input README.md --summary

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import orjson

from markstream.serialization import collect_elements, dumps_events_jsonl, events_to_dicts
from markstream.streaming_parser import StreamingMarkdownParser
from markstream.types import BeginEvent, ParseEvent

DEFAULT_CHUNK_SIZE = 64

log = logging.getLogger("stream_markdown_events")


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def iter_chunks(text: str, chunk_size: int) -> Iterator[str]:
    for start in range(0, len(text), chunk_size):
        yield text[start:start + chunk_size]


def stream_events(text: str, chunk_size: int) -> list[ParseEvent]:
    parser = StreamingMarkdownParser()
    return list(parser.process_stream(iter_chunks(text, chunk_size)))


def summarize(events: list[ParseEvent]) -> dict[str, Any]:
    by_type: Counter[str] = Counter(
        event.element_type for event in events if isinstance(event, BeginEvent)
    )
    elements = collect_elements(events)
    return {
        "event_count": len(events),
        "element_count": len(elements),
        "elements_by_type": dict(sorted(by_type.items())),
        "unclosed": sum(1 for element in elements if element["content"] is None),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Stream a markdown file into parse events")
    parser.add_argument("--input", type=Path, required=True, help="Markdown file to parse")
    parser.add_argument(
        "--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
        help=f"Characters per chunk (default {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument("--jsonl", action="store_true", help="Emit one event per line")
    parser.add_argument("--summary", action="store_true", help="Emit element counts only")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    if args.chunk_size <= 0:
        parser.error("--chunk-size must be > 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if not args.input.exists():
        log.error("input file not found: %s", args.input)
        return 2

    text = args.input.read_text(encoding="utf-8")
    started = time.perf_counter()
    events = stream_events(text, args.chunk_size)
    elapsed = time.perf_counter() - started
    log.info(
        "Parsed %d chars in chunks of %d: %d events in %.3fs",
        len(text), args.chunk_size, len(events), elapsed,
    )

    if args.summary:
        dump_json(summarize(events))
    elif args.jsonl:
        sys.stdout.buffer.write(dumps_events_jsonl(events))
    else:
        dump_json(events_to_dicts(events))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
