"""Bug detector: debugging remnants, raw HTML injection, hooks inside loops."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Union

from ..models.finding import Finding, Severity
from .base import LineRule, apply_rules, contains, make_finding, read_source, split_lines

LINE_RULES = (
    LineRule(
        matches=contains("console.log"),
        title="Console Log Detected",
        severity=Severity.LOW,
        category="Code Quality",
        root_cause="Developer debugging remnant",
        impact="Clutters production logs",
        suggested_fix="Remove console.log statements",
    ),
    LineRule(
        matches=contains("dangerouslySetInnerHTML"),
        title="Dangerous HTML Injection",
        severity=Severity.HIGH,
        category="Security/Bug",
        root_cause="Direct DOM manipulation",
        impact="XSS Vulnerability and React rendering issues",
        suggested_fix="Use React components or sanitize input",
    ),
)

# Hook call somewhere in a for-loop body; cannot be pinned to a line.
HOOK_IN_LOOP = re.compile(r"for\s*\(.*\)\s*\{[^}]*use[A-Z]")

# useEffect dependency arrays usually close lines after the effect opens, so
# they are not checked by the line pass.


class BugDetector:
    key = "bugs"
    name = "Bug Detector"
    prefix = "BUG"

    def __init__(self, project_path: Union[str, Path], files: Sequence[Path]):
        self.project_path = Path(project_path)
        self.files = list(files)

    async def analyze(self) -> list[Finding]:
        bugs: list[Finding] = []

        for file in self.files:
            content = read_source(file)
            if content is None:
                continue

            for index, line in enumerate(split_lines(content)):
                apply_rules(LINE_RULES, bugs, self.prefix, file, line, index + 1)

            if HOOK_IN_LOOP.search(content):
                bugs.append(make_finding(
                    bugs,
                    self.prefix,
                    title="Hook Called in Loop",
                    file=file,
                    line=0,
                    severity=Severity.CRITICAL,
                    category="React Violation",
                    root_cause="Hooks rules violation",
                    impact="Unpredictable component behavior",
                    suggested_fix="Move hook call to top level",
                ))

        return bugs
