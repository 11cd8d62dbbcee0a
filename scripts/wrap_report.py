#!/usr/bin/env python3
"""Report soft-wrap points and segments for every line of a text file.

Widths are measured in character cells: one per character, or with
--east-asian two per East Asian Wide/Fullwidth character.

Usage:
    python3 scripts/wrap_report.py --input notes.txt --max-width 40
    python3 scripts/wrap_report.py --input notes.txt --max-width 20 --char-wrap --east-asian

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

from markstream.line_index import LineIndex
from markstream.types import MeasureTextFn
from markstream.wrap import (
    calculate_line_wrap_points,
    east_asian_measure,
    get_line_segments,
    monospace_measure,
)

log = logging.getLogger("wrap_report")


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def build_report(
    text: str,
    *,
    max_width: float,
    word_wrap: bool,
    measure_text: MeasureTextFn,
) -> dict[str, Any]:
    index = LineIndex.from_text(text)
    rows: list[dict[str, Any]] = []
    visual_total = 0
    for line_no, (line, line_start) in enumerate(zip(index.lines, index.line_offsets, strict=True), start=1):
        points = calculate_line_wrap_points(line, measure_text, max_width=max_width, word_wrap=word_wrap)
        segments = get_line_segments(len(line), points)
        visual_total += len(segments)
        rows.append(
            {
                "line": line_no,
                "start_offset": line_start,
                "length": len(line),
                "wrap_points": [point.offset for point in points],
                "segments": [
                    {
                        "start": seg.start,
                        "end": seg.end,
                        "soft_wrapped": seg.is_soft_wrapped,
                        "text": line[seg.start:seg.end],
                    }
                    for seg in segments
                ],
            },
        )
    return {
        "max_width": max_width,
        "word_wrap": word_wrap,
        "logical_lines": index.line_count,
        "visual_lines": visual_total,
        "lines": rows,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Per-line soft-wrap report")
    parser.add_argument("--input", type=Path, required=True, help="Text file to analyze")
    parser.add_argument("--max-width", type=float, required=True, help="Row width in cells (0 = no wrap)")
    parser.add_argument("--char-wrap", action="store_true", help="Break at characters, not words")
    parser.add_argument("--east-asian", action="store_true", help="Count wide characters as two cells")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    if args.max_width < 0:
        parser.error("--max-width must be >= 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if not args.input.exists():
        log.error("input file not found: %s", args.input)
        return 2

    text = args.input.read_text(encoding="utf-8")
    measure = east_asian_measure() if args.east_asian else monospace_measure()
    report = build_report(
        text,
        max_width=args.max_width,
        word_wrap=not args.char_wrap,
        measure_text=measure,
    )
    log.info("%d logical lines -> %d visual lines", report["logical_lines"], report["visual_lines"])
    dump_json(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
