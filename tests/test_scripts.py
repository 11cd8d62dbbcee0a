"""Smoke tests for the stream_markdown_events and wrap_report CLIs."""
from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from scripts.stream_markdown_events import iter_chunks, stream_events, summarize
from scripts.wrap_report import build_report
from markstream.wrap import monospace_measure

ROOT = Path(__file__).resolve().parents[1]

MARKDOWN = "# Title\n\nSome *text* here\n\n```sh\necho hi\n```\n"


def _run_script(name: str, *args: str) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    return subprocess.run(
        [sys.executable, str(ROOT / "scripts" / name), *args],
        cwd=str(ROOT),
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


class TestStreamMarkdownEventsHelpers:
    def test_iter_chunks(self) -> None:
        assert list(iter_chunks("abcdefg", 3)) == ["abc", "def", "g"]
        assert list(iter_chunks("", 3)) == []

    def test_summarize(self) -> None:
        summary = summarize(stream_events(MARKDOWN, 4))
        assert summary == {
            "event_count": 8,
            "element_count": 4,
            "elements_by_type": {"code": 1, "emphasis": 1, "header": 1, "paragraph": 1},
            "unclosed": 0,
        }


class TestStreamMarkdownEventsCli:
    def test_summary_output(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.md"
        path.write_text(MARKDOWN)
        proc = _run_script("stream_markdown_events.py", "--input", str(path), "--chunk-size", "3", "--summary")
        assert proc.returncode == 0, proc.stderr
        payload = json.loads(proc.stdout)
        assert payload["elements_by_type"] == {"code": 1, "emphasis": 1, "header": 1, "paragraph": 1}

    def test_jsonl_output(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.md"
        path.write_text(MARKDOWN)
        proc = _run_script("stream_markdown_events.py", "--input", str(path), "--jsonl")
        assert proc.returncode == 0, proc.stderr
        rows = [json.loads(line) for line in proc.stdout.splitlines()]
        assert [row["type"] for row in rows] == ["begin", "end", "begin", "begin", "end", "end", "begin", "end"]
        assert rows[4]["final_content"] == "text"
        assert rows[-1]["final_content"] == "echo hi\n"

    def test_missing_input(self, tmp_path: Path) -> None:
        proc = _run_script("stream_markdown_events.py", "--input", str(tmp_path / "nope.md"))
        assert proc.returncode == 2
        assert "not found" in proc.stderr


class TestWrapReport:
    def test_build_report(self) -> None:
        report = build_report(
            "hello world foo bar\nshort",
            max_width=11,
            word_wrap=True,
            measure_text=monospace_measure(),
        )
        assert report["logical_lines"] == 2
        assert report["visual_lines"] == 4
        first = report["lines"][0]
        assert first["wrap_points"] == [6, 16]
        assert [seg["text"] for seg in first["segments"]] == ["hello ", "world foo ", "bar"]
        assert report["lines"][1]["start_offset"] == 20

    def test_cli(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("abcdefghij\n", encoding="utf-8")
        proc = _run_script("wrap_report.py", "--input", str(path), "--max-width", "4", "--char-wrap")
        assert proc.returncode == 0, proc.stderr
        payload = json.loads(proc.stdout)
        assert payload["lines"][0]["wrap_points"] == [4, 8]
        assert payload["visual_lines"] == 4
