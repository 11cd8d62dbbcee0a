"""Logical <-> visual coordinate mapping for soft-wrapped text.

A logical line produces one visual line per segment from
get_line_segments(). The index keeps two lookup tables so that moving
between coordinate systems never rescans the document:

  logical_to_visual_start[i]    first visual row of logical line i
  visual_lines_per_logical[i]   number of visual rows of logical line i

All positions here are 0-based. Queries clamp instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from markstream.line_index import LineIndex, find_line_index
from markstream.types import (
    DEFAULT_WRAP_MODE,
    LogicalPosition,
    MeasureTextFn,
    NavigationResult,
    VisualLine,
    VisualPosition,
    WrapMode,
)
from markstream.wrap import calculate_line_wrap_points, get_line_segments


@dataclass(frozen=True, slots=True)
class WrapLayoutIndex:
    visual_lines: tuple[VisualLine, ...]
    logical_to_visual_start: tuple[int, ...]
    visual_lines_per_logical: tuple[int, ...]
    wrap_width: float
    wrap_mode: WrapMode


def effective_wrap_width(
    container_width: float,
    wrap_mode: WrapMode,
    measure_text: MeasureTextFn,
    padding: float = 0,
) -> float:
    """Width rows may occupy: fixed column width, or container minus padding."""
    if wrap_mode.wrap_column > 0:
        return measure_text("M" * wrap_mode.wrap_column)
    return max(container_width - padding * 2, 0)


def build_wrap_layout_index(
    lines: Sequence[str],
    *,
    container_width: float,
    measure_text: MeasureTextFn,
    wrap_mode: WrapMode = DEFAULT_WRAP_MODE,
    padding: float = 0,
) -> WrapLayoutIndex:
    width = effective_wrap_width(container_width, wrap_mode, measure_text, padding)

    visual_lines: list[VisualLine] = []
    starts: list[int] = []
    counts: list[int] = []

    for logical_idx, line in enumerate(lines):
        starts.append(len(visual_lines))
        wrap_points = (
            calculate_line_wrap_points(line, measure_text, max_width=width, word_wrap=wrap_mode.word_wrap)
            if wrap_mode.soft_wrap
            else []
        )
        segments = get_line_segments(len(line), wrap_points)
        counts.append(len(segments))
        for wrap_idx, segment in enumerate(segments):
            visual_lines.append(
                VisualLine(
                    visual_index=len(visual_lines),
                    logical_line_index=logical_idx,
                    start_offset=segment.start,
                    end_offset=segment.end,
                    is_soft_wrapped=segment.is_soft_wrapped,
                    wrap_index=wrap_idx,
                ),
            )

    if not visual_lines:
        visual_lines.append(
            VisualLine(
                visual_index=0,
                logical_line_index=0,
                start_offset=0,
                end_offset=0,
                is_soft_wrapped=False,
                wrap_index=0,
            ),
        )
        starts.append(0)
        counts.append(1)

    return WrapLayoutIndex(
        visual_lines=tuple(visual_lines),
        logical_to_visual_start=tuple(starts),
        visual_lines_per_logical=tuple(counts),
        wrap_width=width,
        wrap_mode=wrap_mode,
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def get_visual_line(index: WrapLayoutIndex, visual_line_index: int) -> VisualLine | None:
    if 0 <= visual_line_index < len(index.visual_lines):
        return index.visual_lines[visual_line_index]
    return None


def first_visual_line_for_logical(index: WrapLayoutIndex, logical_line_index: int) -> int:
    if 0 <= logical_line_index < len(index.logical_to_visual_start):
        return index.logical_to_visual_start[logical_line_index]
    return 0


def visual_line_count_for_logical(index: WrapLayoutIndex, logical_line_index: int) -> int:
    if 0 <= logical_line_index < len(index.visual_lines_per_logical):
        return index.visual_lines_per_logical[logical_line_index]
    return 1


# ---------------------------------------------------------------------------
# Coordinate conversion
# ---------------------------------------------------------------------------

def logical_to_visual(index: WrapLayoutIndex, logical: LogicalPosition) -> VisualPosition:
    """A column equal to a wrap offset resolves to the end of the earlier row."""
    line = max(0, min(logical.line, len(index.logical_to_visual_start) - 1))
    first = index.logical_to_visual_start[line]
    count = index.visual_lines_per_logical[line]
    column = max(0, logical.column)

    for row in range(first, first + count):
        visual = index.visual_lines[row]
        if visual.start_offset <= column <= visual.end_offset:
            return VisualPosition(line=row, column=column - visual.start_offset)

    last = index.visual_lines[first + count - 1]
    return VisualPosition(line=first + count - 1, column=last.length)


def visual_to_logical(index: WrapLayoutIndex, visual: VisualPosition) -> LogicalPosition:
    row = get_visual_line(index, visual.line)
    if row is None:
        return LogicalPosition(line=0, column=0)
    column = max(0, min(visual.column, row.length))
    return LogicalPosition(line=row.logical_line_index, column=row.start_offset + column)


def offset_to_visual(index: WrapLayoutIndex, line_index: LineIndex, offset: int) -> VisualPosition:
    """Flat document offset to visual position (offset clamped to the text)."""
    clamped = max(0, min(offset, len(line_index.text)))
    line = find_line_index(line_index.line_offsets, clamped)
    column = clamped - line_index.line_offsets[line]
    return logical_to_visual(index, LogicalPosition(line=line, column=column))


def visual_to_offset(index: WrapLayoutIndex, line_index: LineIndex, visual: VisualPosition) -> int:
    logical = visual_to_logical(index, visual)
    # line_column_to_offset is 1-based
    return line_index.line_column_to_offset(logical.line + 1, logical.column + 1)


# ---------------------------------------------------------------------------
# Cursor navigation across visual rows
# ---------------------------------------------------------------------------

def _stay(logical: LogicalPosition, visual: VisualPosition) -> NavigationResult:
    return NavigationResult(logical=logical, visual=visual, moved=False)


def _current_visual(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    visual: VisualPosition | None,
) -> VisualPosition:
    """The caller's visual position when it still belongs to current.line.

    A column equal to a wrap offset is ambiguous in logical coordinates
    (end of one row, start of the next). Passing the visual position from
    the previous NavigationResult keeps the row the cursor is actually on.
    """
    if visual is not None:
        row = get_visual_line(index, visual.line)
        if row is not None and row.logical_line_index == current.line:
            return VisualPosition(line=visual.line, column=max(0, min(visual.column, row.length)))
    return logical_to_visual(index, current)


def _logical_line_length(index: WrapLayoutIndex, line: int) -> int:
    first = first_visual_line_for_logical(index, line)
    last = first + visual_line_count_for_logical(index, line) - 1
    return index.visual_lines[last].end_offset


def _move_to_row(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    current_visual: VisualPosition,
    target_row: int,
    preferred_column: int,
) -> NavigationResult:
    row = get_visual_line(index, target_row)
    if row is None:
        return _stay(current, current_visual)
    visual = VisualPosition(line=target_row, column=max(0, min(preferred_column, row.length)))
    return NavigationResult(logical=visual_to_logical(index, visual), visual=visual, moved=True)


def move_up_visual_line(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    preferred_column: int,
    *,
    visual: VisualPosition | None = None,
) -> NavigationResult:
    current_visual = _current_visual(index, current, visual)
    if current_visual.line <= 0:
        return _stay(current, current_visual)
    return _move_to_row(index, current, current_visual, current_visual.line - 1, preferred_column)


def move_down_visual_line(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    preferred_column: int,
    *,
    visual: VisualPosition | None = None,
) -> NavigationResult:
    current_visual = _current_visual(index, current, visual)
    if current_visual.line >= len(index.visual_lines) - 1:
        return _stay(current, current_visual)
    return _move_to_row(index, current, current_visual, current_visual.line + 1, preferred_column)


def move_to_visual_line_start(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    *,
    visual: VisualPosition | None = None,
) -> NavigationResult:
    """Home within the visual row.

    On a continuation row the returned logical column equals the wrap
    offset; keep the returned visual position for further moves.
    """
    current_visual = _current_visual(index, current, visual)
    target = VisualPosition(line=current_visual.line, column=0)
    return NavigationResult(
        logical=visual_to_logical(index, target),
        visual=target,
        moved=current_visual.column != 0,
    )


def move_to_visual_line_end(
    index: WrapLayoutIndex,
    current: LogicalPosition,
    *,
    visual: VisualPosition | None = None,
) -> NavigationResult:
    current_visual = _current_visual(index, current, visual)
    length = index.visual_lines[current_visual.line].length
    target = VisualPosition(line=current_visual.line, column=length)
    return NavigationResult(
        logical=visual_to_logical(index, target),
        visual=target,
        moved=current_visual.column != length,
    )


# ---------------------------------------------------------------------------
# Cursor navigation within a logical line
# ---------------------------------------------------------------------------

def move_to_logical_line_start(index: WrapLayoutIndex, current: LogicalPosition) -> NavigationResult:
    """Column 0 of the logical line, whatever visual row the cursor is on."""
    target = LogicalPosition(line=current.line, column=0)
    return NavigationResult(
        logical=target,
        visual=logical_to_visual(index, target),
        moved=current.column != 0,
    )


def move_to_logical_line_end(index: WrapLayoutIndex, current: LogicalPosition) -> NavigationResult:
    """End of the logical line (end of its last visual row)."""
    line = max(0, min(current.line, len(index.logical_to_visual_start) - 1))
    length = _logical_line_length(index, line)
    target = LogicalPosition(line=line, column=length)
    return NavigationResult(
        logical=target,
        visual=logical_to_visual(index, target),
        moved=current.line != line or current.column != length,
    )
