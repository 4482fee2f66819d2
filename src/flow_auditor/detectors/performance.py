"""Performance analyzer.

Line-level heuristics for React/JS performance anti-patterns: heavy imports,
list keys, queries and string building inside loops, blocking I/O, top-level
mutable state and unguarded async calls.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Union

from ..models.finding import Finding, Reproducibility, Severity
from .base import LineRule, apply_rules, make_finding, read_source, regex, split_lines

NODE_MODULES_IMPORT = re.compile(
    r"""(import|require)\s*\(\s*['"][^'"]*node_modules[^'"]*['"]\s*\)""", re.IGNORECASE
)
HEAVY_LIBRARY = re.compile(r"lodash|moment|axios|react-dom|styled-components", re.IGNORECASE)

INDEX_AS_KEY = r"""\.map\s*\(\s*\([^)]*\)\s*=>\s*<.*key=["']?i(ndex)?["']?"""
MAP_RENDER = re.compile(r"\{\s*.*\.map\s*\([^)]*\)\s*=>\s*\(")
QUERY_IN_LOOP = (
    r"for\s*\([^)]*\)\s*\{[^}]*fetch"
    r"|for\s*\([^)]*\)\s*\{[^}]*axios"
    r"|for\s*\([^)]*\)\s*\{[^}]*\.query"
)
CONCAT_IN_LOOP = r"for\s*\([^)]*\)\s*\{[^}]*\+=|while\s*\([^)]*\)\s*\{[^}]*\+="
BLOCKING_CALL = (
    r"fs\.readFileSync|fs\.writeFileSync"
    r"""|require\s*\(\s*['"]child_process['"]\s*\)\.exec"""
)
# Only var/let declarations of UPPER_SNAKE names are reported, case-sensitively,
# so ordinary camelCase locals such as `var state = {}` are not flagged.
MUTABLE_TOP_LEVEL = re.compile(r"^(var|let)\s+[A-Z_][A-Z_0-9]*\s*=\s*(\{|\[|[^;]*=>\s*\{)")

ASYNC_CALL = re.compile(r"await|\.then\s*\(", re.IGNORECASE)
ERROR_HANDLING = re.compile(r"try|catch", re.IGNORECASE)
ERROR_HANDLING_WINDOW = 5


def _heavy_library_import(line: str) -> bool:
    return bool(NODE_MODULES_IMPORT.search(line) and HEAVY_LIBRARY.search(line))


def _map_without_key(line: str) -> bool:
    return bool(MAP_RENDER.search(line)) and "key=" not in line


def _mutable_top_level(line: str) -> bool:
    return bool(MUTABLE_TOP_LEVEL.search(line)) and "const" not in line


LINE_RULES = (
    LineRule(
        matches=_heavy_library_import,
        title="Large library import detected",
        severity=Severity.LOW,
        category="Performance",
        impact="May increase bundle size; consider tree-shaking or lazy loading",
        suggested_fix="Use dynamic imports, tree-shake unused code, or consider lighter alternatives",
    ),
    LineRule(
        matches=regex(INDEX_AS_KEY, re.IGNORECASE),
        title="Using array index as key in map",
        severity=Severity.HIGH,
        category="Performance",
        root_cause="Array index used as React key",
        impact="Can cause unnecessary re-renders and list reordering issues",
        suggested_fix="Use unique, stable identifiers (e.g., item.id) instead of array index",
    ),
    LineRule(
        matches=_map_without_key,
        title="Missing key prop in list rendering",
        severity=Severity.HIGH,
        category="Performance",
        root_cause="List rendering without key prop",
        impact="Causes component re-creation on every render cycle",
        suggested_fix="Add unique `key` prop to each rendered element",
    ),
    LineRule(
        matches=regex(QUERY_IN_LOOP, re.IGNORECASE),
        title="Potential N+1 query pattern detected",
        severity=Severity.HIGH,
        category="Performance",
        root_cause="Loop with API/DB query inside may cause N+1 problem",
        impact="High database load and slow response times",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Batch queries or fetch data before loop",
    ),
    LineRule(
        matches=regex(CONCAT_IN_LOOP, re.IGNORECASE),
        title="String concatenation in loop",
        severity=Severity.MEDIUM,
        category="Performance",
        root_cause="String concatenation (+=) inside loop creates new string objects",
        impact="Slower performance and increased memory usage",
        suggested_fix="Use array.join() or template literals with array methods",
    ),
    LineRule(
        matches=regex(BLOCKING_CALL, re.IGNORECASE),
        title="Synchronous blocking operation detected",
        severity=Severity.HIGH,
        category="Performance",
        impact="Blocks event loop and freezes application",
        suggested_fix="Use async versions (fs.readFile, fs.promises, Promise-based APIs)",
    ),
    LineRule(
        matches=_mutable_top_level,
        title="Non-const mutable state at top level",
        severity=Severity.MEDIUM,
        category="Performance",
        root_cause="Global or top-level mutable variables",
        impact="Can cause memory leaks and unexpected state mutations",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Use const with immutable patterns or state management",
    ),
)


def has_nearby_error_handling(lines: Sequence[str], index: int) -> bool:
    """True if any line within 5 lines of ``index`` mentions try or catch."""
    start = max(0, index - ERROR_HANDLING_WINDOW)
    window = lines[start:index + ERROR_HANDLING_WINDOW + 1]
    return any(ERROR_HANDLING.search(other) for other in window)


class PerformanceAnalyzer:
    key = "performance"
    name = "Performance Analyzer"
    prefix = "PERF"

    def __init__(self, project_path: Union[str, Path], files: Sequence[Path]):
        self.project_path = Path(project_path)
        self.files = list(files)

    async def analyze(self) -> list[Finding]:
        issues: list[Finding] = []

        for file in self.files:
            content = read_source(file)
            if content is None:
                continue

            lines = split_lines(content)
            for index, line in enumerate(lines):
                apply_rules(LINE_RULES, issues, self.prefix, file, line, index + 1)

                # Expensive-render and oversized-file heuristics are not reported.

                if ASYNC_CALL.search(line) and not has_nearby_error_handling(lines, index):
                    issues.append(make_finding(
                        issues,
                        self.prefix,
                        title="Async operation without error handling",
                        file=file,
                        line=index + 1,
                        severity=Severity.MEDIUM,
                        category="Performance",
                        root_cause="Unhandled promise rejection",
                        impact="Can crash application or leave resources hanging",
                        reproducibility=Reproducibility.SOMETIMES,
                        suggested_fix="Wrap async operations in try-catch or .catch() handler",
                    ))

        return issues
