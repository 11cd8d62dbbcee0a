"""Core types for the line index, wrap calculator, and markdown stream.

All coordinates are character offsets into Python strings. Cursor
positions are 1-based (editor convention); logical/visual positions used
by the wrap layout index are 0-based. Every record is plain data: frozen,
slotted, and produced fresh per query.

Type hierarchy:
  CursorPosition     1-based (line, column) derived from a flat offset
  WrapPoint          Break offset within one logical line
  LineSegment        [start, end) slice of a line between wrap points
  InlineEmphasis     Inline markdown span matched at a position
  InlineSegment      Plain or emphasized run of a line
  BeginEvent         Structural element opened in the parse stream
  EndEvent           Structural element closed, with its final content
  WrapMode           Soft/word wrap configuration
  VisualLine         One rendered row of a (possibly wrapped) logical line
  LogicalPosition    0-based (line, column) in document coordinates
  VisualPosition     0-based (row, column) in wrapped coordinates
  NavigationResult   Outcome of a cursor move across visual lines
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias


ElementType: TypeAlias = Literal["header", "code", "paragraph", "strong", "emphasis", "strikethrough"]
EmphasisType: TypeAlias = Literal["code", "strong", "emphasis", "strikethrough"]
MeasureTextFn: TypeAlias = Callable[[str], float]


# ---------------------------------------------------------------------------
# Line index
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CursorPosition:
    """1-based line/column pair. Always derived, never a source of truth."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.column < 1:
            raise ValueError(f"column must be >= 1, got {self.column}")


# ---------------------------------------------------------------------------
# Wrapping
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WrapPoint:
    """Offset within a logical line where the next visual row starts."""

    offset: int
    is_soft_wrap: bool = True

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")


@dataclass(frozen=True, slots=True)
class LineSegment:
    """Half-open slice [start, end) of a logical line."""

    start: int
    end: int
    is_soft_wrapped: bool

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end must be >= start, got {self.end} < {self.start}")

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class WrapMode:
    """Text wrapping configuration.

    wrap_column == 0 wraps at the container width; > 0 wraps at a fixed
    column count measured with a representative glyph.
    """

    soft_wrap: bool = False
    word_wrap: bool = True
    wrap_column: int = 0

    def __post_init__(self) -> None:
        if self.wrap_column < 0:
            raise ValueError(f"wrap_column must be >= 0, got {self.wrap_column}")


DEFAULT_WRAP_MODE = WrapMode()


@dataclass(frozen=True, slots=True)
class VisualLine:
    """One visual row; several rows share a logical line when wrapped."""

    visual_index: int
    logical_line_index: int
    start_offset: int
    end_offset: int
    is_soft_wrapped: bool
    wrap_index: int  # 0 for the first row of a logical line

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset


@dataclass(frozen=True, slots=True)
class LogicalPosition:
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class VisualPosition:
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class NavigationResult:
    logical: LogicalPosition
    visual: VisualPosition
    moved: bool


# ---------------------------------------------------------------------------
# Inline emphasis
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InlineEmphasis:
    """An inline span anchored at start_index.

    content is the text between the markers; marker is the opening
    delimiter (the closing one is identical).
    """

    type: EmphasisType
    start_index: int
    end_index: int
    content: str
    marker: str

    def __post_init__(self) -> None:
        if self.start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {self.start_index}")
        if self.end_index <= self.start_index:
            raise ValueError(
                f"end_index must be > start_index, got {self.end_index} <= {self.start_index}",
            )


@dataclass(frozen=True, slots=True)
class InlineSegment:
    """Plain text run (style None) or emphasized run without its markers."""

    kind: Literal["plain", "emph"]
    text: str
    style: EmphasisType | None = None


# ---------------------------------------------------------------------------
# Parse events
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BeginEvent:
    """A structural element was opened."""

    element_type: ElementType
    element_id: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.element_id:
            raise ValueError("element_id cannot be empty")


@dataclass(frozen=True, slots=True)
class EndEvent:
    """A previously begun element was closed with its final content."""

    element_id: str
    final_content: str

    def __post_init__(self) -> None:
        if not self.element_id:
            raise ValueError("element_id cannot be empty")


ParseEvent: TypeAlias = BeginEvent | EndEvent
