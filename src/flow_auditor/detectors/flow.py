"""Navigation flow analyzer.

Collects React Router route declarations and literal API calls, and turns the
routes into human-readable flow descriptions.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Union

from ..models.finding import Finding, Severity
from ..models.report import FlowResult
from .base import make_finding, read_source, split_lines

ROUTE_PATTERN = re.compile(r"""<Route\s+path=['"]([^'"]+)['"]""")
API_CALL_PATTERN = re.compile(r"""(fetch|axios\.get|axios\.post)\s*\(['"]([^'"]+)['"]""")

NO_ROUTES_FILE = "project-root"


def describe_route(route: str) -> str:
    return f"User navigates to {route}"


class FlowAnalyzer:
    key = "flow"
    name = "Flow Analyzer"
    prefix = "FLOW"

    def __init__(self, project_path: Union[str, Path], files: Sequence[Path]):
        self.project_path = Path(project_path)
        self.files = list(files)

    async def analyze(self) -> FlowResult:
        issues: list[Finding] = []
        # dicts keep first-seen order while de-duplicating
        routes: dict[str, None] = {}
        api_calls: dict[str, None] = {}

        for file in self.files:
            content = read_source(file)
            if content is None:
                continue
            for line in split_lines(content):
                route_match = ROUTE_PATTERN.search(line)
                if route_match:
                    routes.setdefault(route_match.group(1))
                api_match = API_CALL_PATTERN.search(line)
                if api_match:
                    api_calls.setdefault(api_match.group(2))

        if not routes:
            issues.append(make_finding(
                issues,
                self.prefix,
                title="No Routes Detected",
                file=NO_ROUTES_FILE,
                line=0,
                severity=Severity.LOW,
                category="Flow",
                root_cause="Missing routing configuration or non-standard router",
                impact="Cannot verify user flows",
                suggested_fix="Use React Router standard patterns",
            ))

        return FlowResult(
            tested_flows=[describe_route(r) for r in routes],
            issues=issues,
            api_endpoints=list(api_calls),
        )
