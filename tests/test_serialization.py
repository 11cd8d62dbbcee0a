"""Tests for markstream.serialization and event/record types."""
from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from markstream.serialization import (
    collect_elements,
    dumps_events_jsonl,
    event_to_dict,
    events_to_dicts,
    save_events_jsonl,
)
from markstream.streaming_parser import parse_markdown
from markstream.types import (
    BeginEvent,
    CursorPosition,
    EndEvent,
    InlineEmphasis,
    LineSegment,
    WrapMode,
    WrapPoint,
)


class TestEventToDict:
    def test_begin(self) -> None:
        event = BeginEvent(element_type="header", element_id="md-1", metadata={"level": 2})
        assert event_to_dict(event) == {
            "type": "begin",
            "element_type": "header",
            "element_id": "md-1",
            "metadata": {"level": 2},
        }

    def test_end(self) -> None:
        assert event_to_dict(EndEvent(element_id="md-1", final_content="Title")) == {
            "type": "end",
            "element_id": "md-1",
            "final_content": "Title",
        }

    def test_unknown_type(self) -> None:
        with pytest.raises(TypeError):
            event_to_dict(object())  # type: ignore[arg-type]

    def test_events_to_dicts(self) -> None:
        rows = events_to_dicts(parse_markdown("# A\n"))
        assert [row["type"] for row in rows] == ["begin", "end"]


class TestJsonl:
    def test_one_object_per_line(self) -> None:
        payload = dumps_events_jsonl(parse_markdown("# A\n\nbody\n"))
        lines = payload.splitlines()
        assert len(lines) == 4
        assert orjson.loads(lines[1])["final_content"] == "A"
        assert payload.endswith(b"\n")

    def test_empty(self) -> None:
        assert dumps_events_jsonl([]) == b""

    def test_save_creates_parent(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "events.jsonl"
        save_events_jsonl(parse_markdown("text\n"), path)
        rows = [orjson.loads(line) for line in path.read_bytes().splitlines()]
        assert rows[-1]["final_content"] == "text"


class TestCollectElements:
    def test_unclosed_element_has_no_content(self) -> None:
        events = [BeginEvent(element_type="paragraph", element_id="p-1")]
        assert collect_elements(events) == [
            {"element_type": "paragraph", "metadata": {}, "content": None},
        ]

    def test_ids_are_dropped(self) -> None:
        first = collect_elements(parse_markdown("# A\nbody\n"))
        second = collect_elements(parse_markdown("# A\nbody\n"))
        assert first == second


class TestRecordValidation:
    def test_cursor_position_is_one_based(self) -> None:
        with pytest.raises(ValueError):
            CursorPosition(line=0, column=1)

    def test_segment_bounds(self) -> None:
        with pytest.raises(ValueError):
            LineSegment(start=5, end=4, is_soft_wrapped=False)
        assert LineSegment(start=2, end=2, is_soft_wrapped=False).length == 0

    def test_wrap_point_offset(self) -> None:
        with pytest.raises(ValueError):
            WrapPoint(offset=-1)

    def test_wrap_mode_column(self) -> None:
        with pytest.raises(ValueError):
            WrapMode(wrap_column=-1)

    def test_emphasis_span(self) -> None:
        with pytest.raises(ValueError):
            InlineEmphasis(type="code", start_index=3, end_index=3, content="", marker="`")

    def test_event_ids_required(self) -> None:
        with pytest.raises(ValueError):
            BeginEvent(element_type="paragraph", element_id="")
        with pytest.raises(ValueError):
            EndEvent(element_id="", final_content="")
