"""Incremental markdown parser emitting begin/end element events.

Input arrives in arbitrary fragments. Complete lines are split off as
soon as a fragment is buffered; only the unterminated tail is held back,
so every character is examined a bounded number of times no matter how
the input is chunked. Lines are classified one at a time by a small
state machine:

  IDLE             no element open
  IN_PARAGRAPH     a paragraph is accumulating lines
  IN_CODE_FENCE    a fenced code block is accumulating raw lines

Headers are single-line and open/close within one transition. When a
paragraph closes, each inline span found in its text (code, strikethrough,
strong, emphasis) is emitted as a child element, markers stripped, just
before the paragraph's own end event.

Classified events go to an outbox that the generator returned by
process_chunk() drains lazily. A caller that stops iterating loses
nothing: undelivered events and unclassified lines stay queued for the
next process_chunk() or complete().

A parser instance is a sequential consumer. Resuming a generator from an
earlier call after a newer process_chunk()/complete() raises
ParserInvariantError rather than interleaving two drains.
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4

from markstream.emphasis import find_all_inline_emphasis
from markstream.types import BeginEvent, ElementType, EndEvent, ParseEvent

_HEADER_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$")
_OPEN_FENCE_RE = re.compile(r"^(`{3,}|~{3,})(.*)$")
_CLOSE_FENCE_RE = re.compile(r"^(`{3,}|~{3,})[ \t]*$")

DEFAULT_CODE_LANGUAGE = "text"


class ParserInvariantError(RuntimeError):
    """Raised on internal-consistency violations (bad end id, overlapping drains)."""


class ParserMode(Enum):
    IDLE = "idle"
    IN_PARAGRAPH = "in_paragraph"
    IN_CODE_FENCE = "in_code_fence"


@dataclass(slots=True)
class _OpenElement:
    element_id: str
    element_type: ElementType
    metadata: dict[str, Any]
    parts: list[str] = field(default_factory=list)
    fence_char: str = ""
    fence_length: int = 0

    def final_content(self) -> str:
        if self.element_type == "code":
            return "".join(self.parts)
        return "\n".join(self.parts)


@dataclass(frozen=True, slots=True)
class _FenceMatch:
    fence_char: str
    fence_length: int
    language: str


def _match_opening_fence(line: str) -> _FenceMatch | None:
    match = _OPEN_FENCE_RE.match(line)
    if match is None:
        return None
    fence, info = match.group(1), match.group(2).strip()
    # A backtick info string cannot contain backticks (```code``` is inline).
    if fence[0] == "`" and "`" in info:
        return None
    language = info.split()[0] if info else DEFAULT_CODE_LANGUAGE
    return _FenceMatch(fence_char=fence[0], fence_length=len(fence), language=language)


def _is_closing_fence(line: str, element: _OpenElement) -> bool:
    match = _CLOSE_FENCE_RE.match(line)
    if match is None:
        return False
    fence = match.group(1)
    return fence[0] == element.fence_char and len(fence) >= element.fence_length


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


class StreamingMarkdownParser:
    """Chunk-at-a-time markdown structure parser.

    Usage::

        parser = StreamingMarkdownParser()
        for chunk in chunks:
            for event in parser.process_chunk(chunk):
                render(event)
        for event in parser.complete():
            render(event)
    """

    def __init__(self, *, id_prefix: str | None = None) -> None:
        self._id_prefix = id_prefix or f"md-{uuid4().hex[:12]}"
        self._counter = 0
        self._pending: list[str] = []
        self._ready: deque[tuple[str, bool]] = deque()
        self._outbox: deque[ParseEvent] = deque()
        self._open: list[_OpenElement] = []
        self._epoch = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def mode(self) -> ParserMode:
        if not self._open:
            return ParserMode.IDLE
        if self._open[-1].element_type == "code":
            return ParserMode.IN_CODE_FENCE
        return ParserMode.IN_PARAGRAPH

    @property
    def open_element_ids(self) -> tuple[str, ...]:
        return tuple(element.element_id for element in self._open)

    @property
    def buffered_text(self) -> str:
        """Unterminated tail waiting for its newline."""
        return "".join(self._pending)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process_chunk(self, text: str) -> Iterator[ParseEvent]:
        """Buffer a fragment now; yield the events it completes lazily."""
        self._epoch += 1
        self._buffer(text)
        return self._drain(self._epoch)

    def complete(self) -> Iterator[ParseEvent]:
        """Flush the tail line and close every open element (in open order).

        The parser is reusable afterwards.
        """
        self._epoch += 1
        if self._pending:
            tail = "".join(self._pending)
            self._pending.clear()
            self._ready.append((_strip_cr(tail), False))
        while self._ready:
            self._consume_line(*self._ready.popleft())
        for element in list(self._open):
            self._close(element)
        return self._drain(self._epoch)

    def process_stream(self, chunks: Iterable[str]) -> Iterator[ParseEvent]:
        """Process every chunk in order, then complete()."""
        for chunk in chunks:
            if not chunk:
                continue
            yield from self.process_chunk(chunk)
        yield from self.complete()

    def reset(self) -> None:
        """Drop buffered input, queued events and open elements without emitting."""
        self._epoch += 1
        self._pending.clear()
        self._ready.clear()
        self._outbox.clear()
        self._open.clear()

    # ------------------------------------------------------------------
    # Buffering and draining
    # ------------------------------------------------------------------

    def _buffer(self, text: str) -> None:
        start = 0
        while True:
            newline = text.find("\n", start)
            if newline < 0:
                break
            if self._pending:
                self._pending.append(text[start:newline])
                line = "".join(self._pending)
                self._pending.clear()
            else:
                line = text[start:newline]
            self._ready.append((_strip_cr(line), True))
            start = newline + 1
        if start < len(text):
            self._pending.append(text[start:])

    def _drain(self, epoch: int) -> Iterator[ParseEvent]:
        while True:
            if epoch != self._epoch:
                raise ParserInvariantError(
                    "overlapping process_chunk/complete drains on one parser instance",
                )
            if self._outbox:
                yield self._outbox.popleft()
                continue
            if not self._ready:
                return
            self._consume_line(*self._ready.popleft())

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _consume_line(self, line: str, terminated: bool) -> None:
        mode = self.mode

        if mode is ParserMode.IN_CODE_FENCE:
            code = self._open[-1]
            if _is_closing_fence(line, code):
                self._end(code.element_id)
            else:
                code.parts.append(line + "\n" if terminated else line)
            return

        if not line.strip():
            if mode is ParserMode.IN_PARAGRAPH:
                self._close(self._open[-1])
            return

        header = _HEADER_RE.match(line)
        fence = None if header else _match_opening_fence(line)

        if header is not None or fence is not None:
            if mode is ParserMode.IN_PARAGRAPH:
                self._close(self._open[-1])
            if header is not None:
                element = self._begin("header", {"level": len(header.group(1))})
                element.parts.append(header.group(2))
                self._end(element.element_id)
            elif fence is not None:
                element = self._begin(
                    "code",
                    {
                        "language": fence.language,
                        "fence_char": fence.fence_char,
                        "fence_length": fence.fence_length,
                    },
                )
                element.fence_char = fence.fence_char
                element.fence_length = fence.fence_length
            return

        if mode is ParserMode.IN_PARAGRAPH:
            self._open[-1].parts.append(line)
            return

        paragraph = self._begin("paragraph", {})
        paragraph.parts.append(line)

    def _begin(self, element_type: ElementType, metadata: dict[str, Any]) -> _OpenElement:
        self._counter += 1
        element = _OpenElement(
            element_id=f"{self._id_prefix}-{self._counter}",
            element_type=element_type,
            metadata=metadata,
        )
        self._open.append(element)
        self._outbox.append(
            BeginEvent(element_type=element_type, element_id=element.element_id, metadata=dict(metadata)),
        )
        return element

    def _close(self, element: _OpenElement) -> None:
        """End an element. A paragraph first emits one child per inline span."""
        if element.element_type == "paragraph":
            for span in find_all_inline_emphasis(element.final_content()):
                child = self._begin(
                    span.type,
                    {"marker": span.marker, "start_index": span.start_index, "end_index": span.end_index},
                )
                child.parts.append(span.content)
                self._end(child.element_id)
        self._end(element.element_id)

    def _end(self, element_id: str) -> None:
        for idx, element in enumerate(self._open):
            if element.element_id == element_id:
                del self._open[idx]
                self._outbox.append(EndEvent(element_id=element_id, final_content=element.final_content()))
                return
        raise ParserInvariantError(f"end for element {element_id!r} which is not open")


def parse_markdown(text: str) -> list[ParseEvent]:
    """Parse a whole string in one chunk and complete it."""
    parser = StreamingMarkdownParser()
    events = list(parser.process_chunk(text))
    events.extend(parser.complete())
    return events
