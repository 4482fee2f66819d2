"""Detector capability and shared line-rule helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence, Union, runtime_checkable

from ..models.finding import Finding, Reproducibility, Severity
from ..models.report import FlowResult


@runtime_checkable
class Detector(Protocol):
    """Protocol that all detectors implement."""

    key: str
    name: str
    prefix: str

    async def analyze(self) -> Union[list[Finding], FlowResult]: ...


@dataclass(frozen=True)
class LineRule:
    """One per-line pattern check and the finding it produces.

    ``root_cause`` of None means the trimmed offending line is reported.
    """

    matches: Callable[[str], bool]
    title: str
    severity: Severity
    category: str
    impact: str
    suggested_fix: str
    root_cause: Optional[str] = None
    reproducibility: Reproducibility = Reproducibility.ALWAYS


def regex(pattern: str, flags: int = 0) -> Callable[[str], bool]:
    """Build a line matcher from a regular expression."""
    compiled = re.compile(pattern, flags)
    return lambda line: compiled.search(line) is not None


def contains(text: str) -> Callable[[str], bool]:
    return lambda line: text in line


def read_source(path: Union[str, Path]) -> Optional[str]:
    """Read a file as UTF-8, or None if it vanished or cannot be decoded.

    Line endings are left untranslated so that a carriage return stays on its line.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        return None


def split_lines(content: str) -> list[str]:
    return content.split("\n")


def next_id(prefix: str, findings: Sequence[Finding]) -> str:
    """Sequential id from the running length of the detector's own results."""
    return f"{prefix}-{len(findings) + 1}"


def make_finding(
    findings: Sequence[Finding],
    prefix: str,
    *,
    title: str,
    file: Union[str, Path],
    line: int,
    severity: Severity,
    category: str,
    root_cause: str,
    impact: str,
    suggested_fix: str,
    reproducibility: Reproducibility = Reproducibility.ALWAYS,
) -> Finding:
    return Finding(
        id=next_id(prefix, findings),
        title=title,
        file=str(file),
        line=line,
        severity=severity,
        category=category,
        root_cause=root_cause,
        impact=impact,
        reproducibility=reproducibility,
        suggested_fix=suggested_fix,
    )


def apply_rules(
    rules: Sequence[LineRule],
    findings: list[Finding],
    prefix: str,
    file: Union[str, Path],
    line: str,
    line_no: int,
) -> None:
    """Run every rule against one line, appending a finding per match."""
    for rule in rules:
        if not rule.matches(line):
            continue
        findings.append(make_finding(
            findings,
            prefix,
            title=rule.title,
            file=file,
            line=line_no,
            severity=rule.severity,
            category=rule.category,
            root_cause=rule.root_cause if rule.root_cause is not None else line.strip(),
            impact=rule.impact,
            reproducibility=rule.reproducibility,
            suggested_fix=rule.suggested_fix,
        ))
