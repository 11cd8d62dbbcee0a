"""Tests for markstream.emphasis."""
from __future__ import annotations

from markstream.emphasis import (
    detect_emphasis,
    detect_inline_code,
    detect_inline_emphasis,
    detect_strikethrough,
    detect_strong,
    find_all_inline_emphasis,
    segment_inline,
)
from markstream.types import InlineEmphasis, InlineSegment


class TestDetectStrong:
    def test_asterisks(self) -> None:
        assert detect_strong("**bold** text", 0) == InlineEmphasis(
            type="strong", start_index=0, end_index=8, content="bold", marker="**",
        )

    def test_underscores(self) -> None:
        found = detect_strong("__bold__", 0)
        assert found is not None
        assert found.marker == "__"
        assert found.content == "bold"

    def test_anchored_not_search(self) -> None:
        assert detect_strong("a **b**", 0) is None
        found = detect_strong("a **b**", 2)
        assert found is not None
        assert (found.start_index, found.end_index) == (2, 7)

    def test_content_cannot_contain_marker(self) -> None:
        assert detect_strong("**a*b**", 0) is None

    def test_single_line_only(self) -> None:
        assert detect_strong("**a\nb**", 0) is None

    def test_unclosed(self) -> None:
        assert detect_strong("**bold", 0) is None


class TestDetectEmphasis:
    def test_asterisk(self) -> None:
        found = detect_emphasis("*it* x")
        assert found is not None
        assert (found.end_index, found.content, found.marker) == (4, "it", "*")

    def test_underscore(self) -> None:
        found = detect_emphasis("_it_")
        assert found is not None
        assert found.marker == "_"

    def test_refuses_strong_markers(self) -> None:
        assert detect_emphasis("**bold**", 0) is None
        assert detect_emphasis("__bold__", 0) is None


class TestDetectInlineCode:
    def test_single_backtick(self) -> None:
        found = detect_inline_code("`code` rest")
        assert found is not None
        assert (found.content, found.marker, found.end_index) == ("code", "`", 6)

    def test_double_backtick_checked_first(self) -> None:
        found = detect_inline_code("``code``")
        assert found is not None
        assert (found.content, found.marker, found.end_index) == ("code", "``", 8)

    def test_double_backtick_holds_single_backtick(self) -> None:
        found = detect_inline_code("``a`b``")
        assert found is not None
        assert (found.content, found.marker, found.end_index) == ("a`b", "``", 7)

    def test_empty_span_is_not_code(self) -> None:
        assert detect_inline_code("``") is None


class TestDetectStrikethrough:
    def test_match(self) -> None:
        found = detect_strikethrough("~~gone~~ here")
        assert found is not None
        assert (found.type, found.end_index, found.content) == ("strikethrough", 8, "gone")

    def test_single_tilde(self) -> None:
        assert detect_strikethrough("~no~") is None


class TestDetectInlineEmphasisPriority:
    def test_code_contents_not_reinterpreted(self) -> None:
        found = detect_inline_emphasis("`**x**`")
        assert found is not None
        assert found.type == "code"
        assert found.content == "**x**"

    def test_strikethrough_before_strong(self) -> None:
        found = detect_inline_emphasis("~~**x**~~")
        assert found is not None
        assert found.type == "strikethrough"

    def test_strong_before_emphasis(self) -> None:
        found = detect_inline_emphasis("**x**")
        assert found is not None
        assert found.type == "strong"

    def test_unmatched_marker(self) -> None:
        assert detect_inline_emphasis("**bold", 0) is None

    def test_triple_asterisk_run(self) -> None:
        assert detect_inline_emphasis("***text***", 0) is None
        matches = find_all_inline_emphasis("***text***")
        assert len(matches) == 1
        assert matches[0].type == "strong"
        assert (matches[0].start_index, matches[0].end_index) == (1, 9)


class TestFindAllInlineEmphasis:
    def test_mixed_spans(self) -> None:
        matches = find_all_inline_emphasis("a *b* and **c** `d`")
        assert [(m.type, m.start_index, m.end_index) for m in matches] == [
            ("emphasis", 2, 5),
            ("strong", 10, 15),
            ("code", 16, 19),
        ]

    def test_matched_span_is_skipped(self) -> None:
        matches = find_all_inline_emphasis("**a _b_ c**")
        assert len(matches) == 1
        assert matches[0].content == "a _b_ c"

    def test_range_limits_start_positions(self) -> None:
        assert [m.start_index for m in find_all_inline_emphasis("*a* *b*", 0, 3)] == [0]
        assert [m.start_index for m in find_all_inline_emphasis("*a* *b*", 0, 4)] == [0]
        assert [m.start_index for m in find_all_inline_emphasis("*a* *b*", 3)] == [4]

    def test_match_may_end_past_range(self) -> None:
        matches = find_all_inline_emphasis("**ab** x", 0, 2)
        assert len(matches) == 1
        assert (matches[0].type, matches[0].end_index) == ("strong", 6)
        assert [m.end_index for m in find_all_inline_emphasis("*a* *b*", 0, 6)] == [3, 7]

    def test_plain_text(self) -> None:
        assert find_all_inline_emphasis("nothing special here") == []


class TestSegmentInline:
    def test_plain_and_emphasis_runs(self) -> None:
        assert segment_inline("a **b** c") == [
            InlineSegment(kind="plain", text="a "),
            InlineSegment(kind="emph", text="b", style="strong"),
            InlineSegment(kind="plain", text=" c"),
        ]

    def test_only_plain(self) -> None:
        assert segment_inline("plain") == [InlineSegment(kind="plain", text="plain")]

    def test_empty(self) -> None:
        assert segment_inline("") == []
