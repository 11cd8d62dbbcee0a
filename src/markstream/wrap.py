"""Soft-wrap break calculation for a single logical line.

Width comes from an injected ``measure_text`` callable (text -> width in
abstract units), so nothing here knows about fonts. The scan assumes the
width of a prefix never shrinks as characters are added; a measurer that
violates this (ligatures, kerning) still terminates but yields
approximate breaks.

Break rules for word wrap:
  - always at the start or end of the line
  - after whitespace or break-friendly punctuation
  - before or after a CJK character (no inter-word spaces in CJK text)
"""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence

from markstream.types import LineSegment, MeasureTextFn, WrapPoint

_BOUNDARY_PUNCTUATION = frozenset(".,;:!?-'\"/\\|()[]{}")

# Inclusive code point ranges treated as individually breakable.
_CJK_RANGES: tuple[tuple[int, int], ...] = (
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0xFF00, 0xFFEF),  # Halfwidth and Fullwidth Forms
    (0xAC00, 0xD7AF),  # Hangul Syllables
)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------

def is_word_boundary_char(ch: str) -> bool:
    """True for whitespace and punctuation after which a line may break."""
    if not ch:
        return False
    return ch.isspace() or ch in _BOUNDARY_PUNCTUATION


def is_cjk_char(ch: str) -> bool:
    """True if the first code point of ch is in a CJK range."""
    if not ch:
        return False
    code = ord(ch[0])
    return any(lo <= code <= hi for lo, hi in _CJK_RANGES)


def is_word_break_point(text: str, index: int) -> bool:
    """Whether a break may occur before ``text[index]``."""
    if index <= 0 or index >= len(text):
        return True

    prev_ch = text[index - 1]
    curr_ch = text[index]
    if is_word_boundary_char(prev_ch):
        return True
    return is_cjk_char(curr_ch) or is_cjk_char(prev_ch)


# ---------------------------------------------------------------------------
# Break search
# ---------------------------------------------------------------------------

def find_wrap_position(
    text: str,
    start_offset: int,
    max_width: float,
    measure_text: MeasureTextFn,
    word_wrap: bool,
) -> int:
    """Offset (relative to the whole line) where the row starting at start_offset ends.

    Returns len(text) when the rest of the line fits. Otherwise the
    character limit is the longest prefix that fits (at least one char so
    callers always advance). With word_wrap the nearest break point after
    start_offset at or before that limit wins; a single token wider than
    max_width falls back to the character limit.
    """
    remaining = text[start_offset:]
    if measure_text(remaining) <= max_width:
        return len(text)

    lo = 0
    hi = len(remaining)
    while lo < hi:
        mid = (lo + hi + 1) >> 1
        if measure_text(remaining[:mid]) <= max_width:
            lo = mid
        else:
            hi = mid - 1

    if lo == 0:
        lo = 1

    limit = start_offset + lo
    if not word_wrap:
        return limit

    for i in range(limit, start_offset, -1):
        if is_word_break_point(text, i):
            return i
    return limit


def calculate_line_wrap_points(
    line: str,
    measure_text: MeasureTextFn,
    *,
    max_width: float,
    word_wrap: bool,
) -> list[WrapPoint]:
    """All soft-wrap points for one line; empty when no wrapping is needed."""
    if max_width <= 0 or not line:
        return []
    if measure_text(line) <= max_width:
        return []

    points: list[WrapPoint] = []
    offset = 0
    while offset < len(line):
        wrap_offset = find_wrap_position(line, offset, max_width, measure_text, word_wrap)
        if wrap_offset >= len(line):
            break
        points.append(WrapPoint(offset=wrap_offset, is_soft_wrap=True))
        offset = wrap_offset
    return points


def get_line_segments(line_length: int, wrap_points: Sequence[WrapPoint]) -> list[LineSegment]:
    """Partition [0, line_length) at each wrap point."""
    segments: list[LineSegment] = []
    start = 0
    for point in wrap_points:
        segments.append(LineSegment(start=start, end=point.offset, is_soft_wrapped=point.is_soft_wrap))
        start = point.offset
    segments.append(LineSegment(start=start, end=line_length, is_soft_wrapped=False))
    return segments


# ---------------------------------------------------------------------------
# Reference measurers
# ---------------------------------------------------------------------------

def monospace_measure(char_width: float = 1.0) -> MeasureTextFn:
    """Every character is char_width wide."""

    def measure(text: str) -> float:
        return len(text) * char_width

    return measure


def east_asian_measure(char_width: float = 1.0) -> MeasureTextFn:
    """Terminal-style width: East Asian Wide/Fullwidth chars count double."""

    def measure(text: str) -> float:
        cells = 0
        for ch in text:
            cells += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
        return cells * char_width

    return measure
