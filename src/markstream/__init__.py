"""Streaming markdown parsing, line indexing, and soft-wrap calculation."""

from markstream.emphasis import (
    detect_emphasis,
    detect_inline_code,
    detect_inline_emphasis,
    detect_strikethrough,
    detect_strong,
    find_all_inline_emphasis,
    segment_inline,
)
from markstream.line_index import (
    LineIndex,
    LineIndexCache,
    build_line_offsets,
    find_line_index,
    line_column_to_offset,
    offset_to_line_column,
    split_lines,
)
from markstream.serialization import (
    collect_elements,
    dumps_events_jsonl,
    event_to_dict,
    events_to_dicts,
    save_events_jsonl,
)
from markstream.streaming_parser import (
    ParserInvariantError,
    ParserMode,
    StreamingMarkdownParser,
    parse_markdown,
)
from markstream.types import (
    DEFAULT_WRAP_MODE,
    BeginEvent,
    CursorPosition,
    EndEvent,
    InlineEmphasis,
    InlineSegment,
    LineSegment,
    LogicalPosition,
    NavigationResult,
    ParseEvent,
    VisualLine,
    VisualPosition,
    WrapMode,
    WrapPoint,
)
from markstream.wrap import (
    calculate_line_wrap_points,
    east_asian_measure,
    find_wrap_position,
    get_line_segments,
    is_cjk_char,
    is_word_boundary_char,
    is_word_break_point,
    monospace_measure,
)
from markstream.wrap_layout import (
    WrapLayoutIndex,
    build_wrap_layout_index,
    effective_wrap_width,
    first_visual_line_for_logical,
    get_visual_line,
    logical_to_visual,
    move_down_visual_line,
    move_to_logical_line_end,
    move_to_logical_line_start,
    move_to_visual_line_end,
    move_to_visual_line_start,
    move_up_visual_line,
    offset_to_visual,
    visual_line_count_for_logical,
    visual_to_logical,
    visual_to_offset,
)

__all__ = [
    "DEFAULT_WRAP_MODE",
    "BeginEvent",
    "CursorPosition",
    "EndEvent",
    "InlineEmphasis",
    "InlineSegment",
    "LineIndex",
    "LineIndexCache",
    "LineSegment",
    "LogicalPosition",
    "NavigationResult",
    "ParseEvent",
    "ParserInvariantError",
    "ParserMode",
    "StreamingMarkdownParser",
    "VisualLine",
    "VisualPosition",
    "WrapLayoutIndex",
    "WrapMode",
    "WrapPoint",
    "build_line_offsets",
    "build_wrap_layout_index",
    "calculate_line_wrap_points",
    "collect_elements",
    "detect_emphasis",
    "detect_inline_code",
    "detect_inline_emphasis",
    "detect_strikethrough",
    "detect_strong",
    "dumps_events_jsonl",
    "east_asian_measure",
    "effective_wrap_width",
    "event_to_dict",
    "events_to_dicts",
    "find_all_inline_emphasis",
    "find_line_index",
    "find_wrap_position",
    "first_visual_line_for_logical",
    "get_line_segments",
    "get_visual_line",
    "is_cjk_char",
    "is_word_boundary_char",
    "is_word_break_point",
    "line_column_to_offset",
    "logical_to_visual",
    "monospace_measure",
    "move_down_visual_line",
    "move_to_logical_line_end",
    "move_to_logical_line_start",
    "move_to_visual_line_end",
    "move_to_visual_line_start",
    "move_up_visual_line",
    "offset_to_line_column",
    "offset_to_visual",
    "parse_markdown",
    "save_events_jsonl",
    "segment_inline",
    "split_lines",
    "visual_line_count_for_logical",
    "visual_to_logical",
    "visual_to_offset",
]
