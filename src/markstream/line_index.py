"""Offset <-> line/column index over editor text.

line_offsets[i] is the flat char offset where line i starts (0-based).
Lookups are O(log N) binary searches over that table. Nothing here
raises on out-of-range input; positions are clamped.
"""

from __future__ import annotations

import bisect
from collections.abc import Sequence
from dataclasses import dataclass

from markstream.types import CursorPosition


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only. The empty string is one empty line."""
    return text.split("\n")


def build_line_offsets(lines: Sequence[str]) -> tuple[int, ...]:
    """Start offset of each line, counting one char for each implicit newline."""
    offsets: list[int] = []
    offset = 0
    for line in lines:
        offsets.append(offset)
        offset += len(line) + 1
    return tuple(offsets)


def find_line_index(line_offsets: Sequence[int], offset: int) -> int:
    """Greatest i with ``line_offsets[i] <= offset``.

    Returns 0 for an empty table and for offsets before the first line;
    offsets past the end land on the last line.
    """
    return max(0, bisect.bisect_right(line_offsets, offset) - 1)


def offset_to_line_column(
    lines: Sequence[str],
    line_offsets: Sequence[int],
    offset: int,
) -> CursorPosition:
    """Convert a flat offset to a 1-based cursor position."""
    if not lines:
        return CursorPosition(line=1, column=1)

    clamped = max(0, offset)
    line_idx = find_line_index(line_offsets, clamped)
    column = clamped - line_offsets[line_idx] + 1
    return CursorPosition(line=line_idx + 1, column=column)


def line_column_to_offset(
    *,
    lines: Sequence[str],
    line_offsets: Sequence[int],
    line: int,
    column: int,
) -> int:
    """Convert a 1-based line/column to a flat offset.

    Line is clamped to [1, line_count], column to [1, len(line) + 1].
    """
    if not lines:
        return 0

    line_idx = max(0, min(line - 1, len(lines) - 1))
    col_offset = max(0, min(column - 1, len(lines[line_idx])))
    return line_offsets[line_idx] + col_offset


@dataclass(frozen=True, slots=True)
class LineIndex:
    """Lines and offsets derived from one version of a text."""

    text: str
    lines: tuple[str, ...]
    line_offsets: tuple[int, ...]
    version: object = None

    @classmethod
    def from_text(cls, text: str, *, version: object = None) -> LineIndex:
        lines = tuple(split_lines(text))
        return cls(
            text=text,
            lines=lines,
            line_offsets=build_line_offsets(lines),
            version=version,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_text(self, line: int) -> str:
        """Text of a 1-based line, clamped to the valid range."""
        idx = max(0, min(line - 1, len(self.lines) - 1))
        return self.lines[idx]

    def offset_to_line_column(self, offset: int) -> CursorPosition:
        return offset_to_line_column(self.lines, self.line_offsets, offset)

    def line_column_to_offset(self, line: int, column: int) -> int:
        return line_column_to_offset(
            lines=self.lines,
            line_offsets=self.line_offsets,
            line=line,
            column=column,
        )


class LineIndexCache:
    """Holds the index for the current text, replacing it when the text changes.

    With an explicit version (e.g. an edit counter) the index is rebuilt
    only when the version differs. Without one, text identity is checked
    first and equality second, so an unchanged string never triggers a
    rescan of the document.
    """

    __slots__ = ("_current", "builds")

    def __init__(self) -> None:
        self._current: LineIndex | None = None
        self.builds = 0

    @property
    def current(self) -> LineIndex | None:
        return self._current

    def get(self, text: str, version: object = None) -> LineIndex:
        current = self._current
        if current is not None and self._is_fresh(current, text, version):
            return current
        index = LineIndex.from_text(text, version=version)
        self._current = index
        self.builds += 1
        return index

    def invalidate(self) -> None:
        self._current = None

    @staticmethod
    def _is_fresh(current: LineIndex, text: str, version: object) -> bool:
        if version is not None or current.version is not None:
            return version == current.version
        return current.text is text or current.text == text
