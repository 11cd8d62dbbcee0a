"""Inline markdown span detection: code, strikethrough, strong, emphasis.

Each detector is a match anchored at ``start_index`` (never a search) and
returns one InlineEmphasis or None. Matches stay on one line and need
non-empty content without the marker character.

Priority in detect_inline_emphasis is fixed: code, strikethrough, strong,
emphasis. Code spans keep their contents literal, and ``**`` must be
tried before ``*`` so that ``***text***`` style runs resolve the same way
every time.
"""

from __future__ import annotations

import re

from markstream.types import EmphasisType, InlineEmphasis, InlineSegment

_CODE_DOUBLE_RE = re.compile(r"``((?:[^`\n]|`(?!`))+)``")
_CODE_SINGLE_RE = re.compile(r"`([^`\n]+)`")
_STRONG_ASTERISK_RE = re.compile(r"\*\*([^*\n]+)\*\*")
_STRONG_UNDERSCORE_RE = re.compile(r"__([^_\n]+)__")
_EMPHASIS_ASTERISK_RE = re.compile(r"\*([^*\n]+)\*")
_EMPHASIS_UNDERSCORE_RE = re.compile(r"_([^_\n]+)_")
_STRIKETHROUGH_RE = re.compile(r"~~([^~\n]+)~~")


def _match_at(
    pattern: re.Pattern[str],
    text: str,
    start_index: int,
    kind: EmphasisType,
    marker: str,
) -> InlineEmphasis | None:
    if start_index < 0:
        return None
    match = pattern.match(text, start_index)
    if match is None:
        return None
    return InlineEmphasis(
        type=kind,
        start_index=start_index,
        end_index=match.end(),
        content=match.group(1),
        marker=marker,
    )


def detect_inline_code(text: str, start_index: int = 0) -> InlineEmphasis | None:
    """Backtick code span.

    The double-backtick form, whose content may contain single backticks,
    is tried first so a doubled pair is not read as two single spans.
    """
    return (
        _match_at(_CODE_DOUBLE_RE, text, start_index, "code", "``")
        or _match_at(_CODE_SINGLE_RE, text, start_index, "code", "`")
    )


def detect_strong(text: str, start_index: int = 0) -> InlineEmphasis | None:
    return (
        _match_at(_STRONG_ASTERISK_RE, text, start_index, "strong", "**")
        or _match_at(_STRONG_UNDERSCORE_RE, text, start_index, "strong", "__")
    )


def detect_emphasis(text: str, start_index: int = 0) -> InlineEmphasis | None:
    """Single-marker emphasis, refused where a doubled (strong) marker starts."""
    if not text.startswith("**", start_index):
        found = _match_at(_EMPHASIS_ASTERISK_RE, text, start_index, "emphasis", "*")
        if found is not None:
            return found
    if not text.startswith("__", start_index):
        return _match_at(_EMPHASIS_UNDERSCORE_RE, text, start_index, "emphasis", "_")
    return None


def detect_strikethrough(text: str, start_index: int = 0) -> InlineEmphasis | None:
    return _match_at(_STRIKETHROUGH_RE, text, start_index, "strikethrough", "~~")


_DETECTORS = (
    detect_inline_code,
    detect_strikethrough,
    detect_strong,
    detect_emphasis,
)


def detect_inline_emphasis(text: str, start_index: int = 0) -> InlineEmphasis | None:
    """First match among the detectors, in priority order."""
    for detector in _DETECTORS:
        found = detector(text, start_index)
        if found is not None:
            return found
    return None


def find_all_inline_emphasis(
    text: str,
    start_index: int = 0,
    end_index: int | None = None,
) -> list[InlineEmphasis]:
    """Left-to-right scan of match start positions in [start_index, end_index).

    A match skips the scan past its end, so markers inside an already
    matched span are never detected on their own. Only the start position
    is bounded: a span that starts in range may end past end_index.
    """
    end = len(text) if end_index is None else max(0, min(end_index, len(text)))
    results: list[InlineEmphasis] = []
    pos = max(0, start_index)
    while pos < end:
        found = detect_inline_emphasis(text, pos)
        if found is not None:
            results.append(found)
            pos = found.end_index
            continue
        pos += 1
    return results


def segment_inline(text: str) -> list[InlineSegment]:
    """Split text into plain runs and emphasized runs (markers stripped)."""
    segments: list[InlineSegment] = []
    pos = 0
    for match in find_all_inline_emphasis(text):
        if match.start_index > pos:
            segments.append(InlineSegment(kind="plain", text=text[pos:match.start_index]))
        segments.append(InlineSegment(kind="emph", text=match.content, style=match.type))
        pos = match.end_index
    if pos < len(text):
        segments.append(InlineSegment(kind="plain", text=text[pos:]))
    return segments
