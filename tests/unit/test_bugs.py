"""Tests for detectors/bugs.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from flow_auditor.detectors.base import read_source, split_lines
from flow_auditor.detectors.bugs import BugDetector
from flow_auditor.models.finding import Severity


async def _analyze(tmp_path: Path, *files: Path):
    return await BugDetector(tmp_path, list(files)).analyze()


class TestBugDetector:
    @pytest.mark.asyncio
    async def test_console_log(self, tmp_path, make_file):
        f = make_file("app.js", "console.log('debug')")
        bugs = await _analyze(tmp_path, f)
        assert len(bugs) == 1
        bug = bugs[0]
        assert bug.id == "BUG-1"
        assert bug.title == "Console Log Detected"
        assert bug.severity == Severity.LOW
        assert bug.category == "Code Quality"
        assert bug.line == 1
        assert bug.file == str(f)

    @pytest.mark.asyncio
    async def test_dangerous_html(self, tmp_path, make_file):
        f = make_file("Post.jsx", "\n<div dangerouslySetInnerHTML={{ __html: body }} />\n")
        bugs = await _analyze(tmp_path, f)
        assert [(b.title, b.severity, b.category, b.line) for b in bugs] == [
            ("Dangerous HTML Injection", Severity.HIGH, "Security/Bug", 2),
        ]

    @pytest.mark.asyncio
    async def test_one_line_multiple_findings_in_check_order(self, tmp_path, make_file):
        f = make_file("x.jsx", "console.log(<p dangerouslySetInnerHTML={x} />)")
        bugs = await _analyze(tmp_path, f)
        assert [b.id for b in bugs] == ["BUG-1", "BUG-2"]
        assert [b.title for b in bugs] == ["Console Log Detected", "Dangerous HTML Injection"]

    @pytest.mark.asyncio
    async def test_hook_in_loop_reported_after_line_findings(self, tmp_path, make_file):
        f = make_file(
            "List.jsx",
            "console.log(items);\n"
            "for (let i = 0; i < items.length; i++) {\n"
            "  const [value] = useState(items[i]);\n"
            "}\n",
        )
        bugs = await _analyze(tmp_path, f)
        assert [b.id for b in bugs] == ["BUG-1", "BUG-2"]
        hook = bugs[1]
        assert hook.title == "Hook Called in Loop"
        assert hook.severity == Severity.CRITICAL
        assert hook.category == "React Violation"
        assert hook.line == 0

    @pytest.mark.asyncio
    async def test_hook_in_loop_once_per_file(self, tmp_path, make_file):
        f = make_file(
            "Many.jsx",
            "for (const a of as) { useA(); }\nfor (const b of bs) { useB(); }\n",
        )
        bugs = await _analyze(tmp_path, f)
        assert [b.title for b in bugs] == ["Hook Called in Loop"]

    @pytest.mark.asyncio
    async def test_lowercase_after_use_is_not_a_hook(self, tmp_path, make_file):
        f = make_file("loop.js", "for (const x of xs) { user.save(x); }\n")
        assert await _analyze(tmp_path, f) == []

    @pytest.mark.asyncio
    async def test_effect_without_deps_not_reported(self, tmp_path, make_file):
        f = make_file("Effect.jsx", "useEffect(() => {\n  load();\n});\n")
        assert await _analyze(tmp_path, f) == []

    @pytest.mark.asyncio
    async def test_ids_continue_across_files(self, tmp_path, make_file):
        a = make_file("a.js", "console.log(1)\n")
        b = make_file("b.js", "console.log(2)\n")
        bugs = await _analyze(tmp_path, a, b)
        assert [b.id for b in bugs] == ["BUG-1", "BUG-2"]
        assert [b.file for b in bugs] == [str(a), str(b)]

    @pytest.mark.asyncio
    async def test_ids_reset_per_call(self, tmp_path, make_file):
        f = make_file("a.js", "console.log(1)\n")
        detector = BugDetector(tmp_path, [f])
        first = await detector.analyze()
        second = await detector.analyze()
        assert [b.id for b in first] == [b.id for b in second] == ["BUG-1"]

    @pytest.mark.asyncio
    async def test_unreadable_files_skipped(self, tmp_path, make_file):
        good = make_file("good.js", "console.log('ok')\n")
        binary = tmp_path / "binary.js"
        binary.write_bytes(b"\xff\xfe\xfaconsole.log\n")
        bugs = await _analyze(tmp_path, tmp_path / "vanished.js", binary, good)
        assert [b.file for b in bugs] == [str(good)]

    @pytest.mark.asyncio
    async def test_no_files(self, tmp_path):
        assert await _analyze(tmp_path) == []

    @pytest.mark.asyncio
    async def test_carriage_returns_do_not_split_lines(self, tmp_path):
        f = tmp_path / "legacy.js"
        f.write_bytes(b"const a = 1;\rconsole.log(a);\rconsole.log(b);\r")
        bugs = await _analyze(tmp_path, f)
        assert [(b.id, b.line) for b in bugs] == [("BUG-1", 1)]

    @pytest.mark.asyncio
    async def test_crlf_line_numbers(self, tmp_path):
        f = tmp_path / "win.js"
        f.write_bytes(b"const a = 1;\r\nconsole.log(a);\r\n")
        bugs = await _analyze(tmp_path, f)
        assert [(b.line, b.root_cause) for b in bugs] == [(2, "console.log(a);")]


class TestReadSource:
    def test_keeps_carriage_returns(self, tmp_path):
        f = tmp_path / "win.js"
        f.write_bytes(b"x\r\ny\r\n")
        assert read_source(f) == "x\r\ny\r\n"
        assert split_lines(read_source(f)) == ["x\r", "y\r", ""]

    def test_missing_file(self, tmp_path):
        assert read_source(tmp_path / "nope.js") is None
