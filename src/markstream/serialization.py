"""Plain-dict and JSONL views of parse events (orjson-backed)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import orjson

from markstream.types import BeginEvent, EndEvent, ParseEvent


def event_to_dict(event: ParseEvent) -> dict[str, Any]:
    if isinstance(event, BeginEvent):
        return {
            "type": "begin",
            "element_type": event.element_type,
            "element_id": event.element_id,
            "metadata": dict(event.metadata),
        }
    if isinstance(event, EndEvent):
        return {
            "type": "end",
            "element_id": event.element_id,
            "final_content": event.final_content,
        }
    raise TypeError(f"Unsupported event type: {type(event).__name__}")


def events_to_dicts(events: Iterable[ParseEvent]) -> list[dict[str, Any]]:
    return [event_to_dict(event) for event in events]


def dumps_events_jsonl(events: Iterable[ParseEvent]) -> bytes:
    """One JSON object per line, keys sorted, trailing newline."""
    lines = [orjson.dumps(event_to_dict(event), option=orjson.OPT_SORT_KEYS) for event in events]
    if not lines:
        return b""
    return b"\n".join(lines) + b"\n"


def save_events_jsonl(events: Iterable[ParseEvent], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_events_jsonl(events))


def collect_elements(events: Iterable[ParseEvent]) -> list[dict[str, Any]]:
    """Fold an event stream into id-free element records, in begin order.

    Two streams describing the same document (e.g. the same input chunked
    differently) produce equal results. Elements never ended have
    content None.
    """
    records: list[dict[str, Any]] = []
    by_id: dict[str, dict[str, Any]] = {}
    for event in events:
        if isinstance(event, BeginEvent):
            record = {
                "element_type": event.element_type,
                "metadata": dict(event.metadata),
                "content": None,
            }
            by_id[event.element_id] = record
            records.append(record)
        elif isinstance(event, EndEvent):
            record = by_id.pop(event.element_id, None)
            if record is not None:
                record["content"] = event.final_content
    return records
