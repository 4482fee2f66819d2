"""Security scanner: hardcoded secrets, eval, plain HTTP."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Union

from ..models.finding import Finding, Severity
from .base import LineRule, apply_rules, read_source, regex, split_lines

HARDCODED_SECRET = r"""(api_key|secret|password|token)\s*[:=]\s*['"][a-zA-Z0-9_\-]{20,}['"]"""


def _insecure_http(line: str) -> bool:
    return "http://" in line and "localhost" not in line


LINE_RULES = (
    LineRule(
        matches=regex(HARDCODED_SECRET, re.IGNORECASE),
        title="Hardcoded Secret Detected",
        severity=Severity.CRITICAL,
        category="Security",
        root_cause="Secret committed to source code",
        impact="Credential compromise",
        suggested_fix="Use environment variables (.env)",
    ),
    LineRule(
        matches=regex(r"\beval\s*\("),
        title="Eval Usage Detected",
        severity=Severity.HIGH,
        category="Security",
        root_cause="Unsafe code execution",
        impact="Remote Code Execution",
        suggested_fix="Refactor to avoid eval()",
    ),
    LineRule(
        matches=_insecure_http,
        title="Insecure HTTP Protocol",
        severity=Severity.MEDIUM,
        category="Security",
        root_cause="Unencrypted communication",
        impact="Man-in-the-Middle attacks",
        suggested_fix="Use HTTPS",
    ),
)


class SecurityScanner:
    key = "security"
    name = "Security Scanner"
    prefix = "SEC"

    def __init__(self, project_path: Union[str, Path], files: Sequence[Path]):
        self.project_path = Path(project_path)
        self.files = list(files)

    async def analyze(self) -> list[Finding]:
        issues: list[Finding] = []

        for file in self.files:
            content = read_source(file)
            if content is None:
                continue
            for index, line in enumerate(split_lines(content)):
                apply_rules(LINE_RULES, issues, self.prefix, file, line, index + 1)

        return issues
