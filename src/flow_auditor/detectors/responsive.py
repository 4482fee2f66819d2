"""Responsiveness detector for stylesheets, HTML and JS/TS components."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence, Union

from ..models.finding import Finding, Reproducibility, Severity
from .base import LineRule, apply_rules, make_finding, read_source, regex, split_lines

RESPONSIVE_EXTENSIONS = (
    ".css", ".scss", ".less", ".html", ".module.css",
    ".ts", ".tsx", ".js", ".jsx",
)

VIEWPORT_META = re.compile(r"""name\s*=\s*['"]viewport['"]""", re.IGNORECASE)

OVERFLOW = r"overflow\s*:\s*(hidden|auto|scroll)"
OVERFLOW_AXIS = r"overflow-[xy]\s*:\s*(hidden|auto|scroll)"

FIXED_SIZE_DECLARATION = re.compile(r"(?:^|\W)(?:width|height)\s*:\s*\d+px\b", re.IGNORECASE)
PIXEL_VALUE = re.compile(r"\d+px\s*(?:;|,|\))", re.IGNORECASE)
SIZE_PROPERTY = re.compile(r"width|height", re.IGNORECASE)

INLINE_SIZE_STYLE = re.compile(r"style\s*=\s*\{\{[^}]*\b(width|height)\b[^}]*\}\}", re.IGNORECASE)
INLINE_PIXEL_STYLE = re.compile(r"style=\{[^}]*\d+px[^}]*\}", re.IGNORECASE)


def _fixed_pixel_size(line: str) -> bool:
    # The declaration form already implies a size property, so grouping the
    # alternatives either way matches the same lines.
    if FIXED_SIZE_DECLARATION.search(line):
        return True
    return bool(PIXEL_VALUE.search(line) and SIZE_PROPERTY.search(line))


def _inline_fixed_style(line: str) -> bool:
    return bool(INLINE_SIZE_STYLE.search(line) or INLINE_PIXEL_STYLE.search(line))


LINE_RULES = (
    LineRule(
        matches=regex(OVERFLOW, re.IGNORECASE),
        title="Overflow property detected",
        severity=Severity.MEDIUM,
        category="Responsiveness",
        impact="May hide overflowing content or cause unexpected scroll behavior on small screens",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Review overflow usage and test across breakpoints; avoid globally hiding overflow on body/html",
    ),
    LineRule(
        matches=_fixed_pixel_size,
        title="Fixed size in pixels found",
        severity=Severity.MEDIUM,
        category="Responsiveness",
        impact="Fixed pixel sizes may not adapt to different screen sizes",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Use relative units (%, em, rem, vw) or add responsive breakpoints",
    ),
    LineRule(
        matches=_inline_fixed_style,
        title="Inline fixed pixel style detected",
        severity=Severity.MEDIUM,
        category="Responsiveness",
        impact="Inline fixed styles are hard to override at different breakpoints",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Move styles to CSS and use responsive units or media queries",
    ),
    LineRule(
        matches=regex(OVERFLOW_AXIS, re.IGNORECASE),
        title="Overflow-x/y property detected",
        severity=Severity.MEDIUM,
        category="Responsiveness",
        impact="May truncate content on smaller screens or cause unwanted scrollbars",
        reproducibility=Reproducibility.SOMETIMES,
        suggested_fix="Test on mobile devices and consider wrapping content or using flex/grid",
    ),
)


def is_responsive_candidate(path: Union[str, Path]) -> bool:
    return str(path).lower().endswith(RESPONSIVE_EXTENSIONS)


class ResponsiveDetector:
    key = "responsive"
    name = "Responsive Detector"
    prefix = "RESP"

    def __init__(self, project_path: Union[str, Path], files: Sequence[Path]):
        self.project_path = Path(project_path)
        self.files = list(files)

    async def analyze(self) -> list[Finding]:
        issues: list[Finding] = []

        for file in self.files:
            if not is_responsive_candidate(file):
                continue

            content = read_source(file)
            if content is None:
                continue

            if str(file).lower().endswith(".html") and not VIEWPORT_META.search(content):
                issues.append(make_finding(
                    issues,
                    self.prefix,
                    title="Missing viewport meta tag",
                    file=file,
                    line=0,
                    severity=Severity.HIGH,
                    category="Responsiveness",
                    root_cause='No <meta name="viewport"> found in HTML',
                    impact="Site will not scale correctly on mobile devices",
                    suggested_fix=(
                        'Add <meta name="viewport" content="width=device-width, '
                        'initial-scale=1"> in <head>'
                    ),
                ))

            for index, line in enumerate(split_lines(content)):
                apply_rules(LINE_RULES, issues, self.prefix, file, line, index + 1)

        return issues
