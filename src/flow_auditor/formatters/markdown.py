"""Markdown audit report."""

from __future__ import annotations

from datetime import datetime

from .. import __version__
from ..models.finding import Finding, FindingSummary
from ..models.report import AuditReport

SECTION_TITLES = {
    "bugs": "Bugs",
    "security_issues": "Security",
    "performance_issues": "Performance",
    "missing_tests": "Missing Tests",
}


def _report_sections(report: AuditReport) -> dict[str, list[Finding]]:
    return {key: getattr(report, key) for key in SECTION_TITLES}


def generate_markdown_report(
    report: AuditReport,
    project_path: str = "",
    duration_seconds: float = 0,
) -> str:
    """Generate a human-readable markdown audit report."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    summary = report.project_summary
    sections = _report_sections(report)

    lines: list[str] = []
    lines.append("# Project Audit Report")
    lines.append("")
    if project_path:
        lines.append(f"**Project:** {project_path}")
    lines.append(f"**Date:** {timestamp}")
    lines.append(f"**Risk Level:** {summary.overall_risk_level.value}")
    lines.append(f"**Tech Stack:** {summary.tech_stack}")
    if duration_seconds:
        lines.append(f"**Duration:** {round(duration_seconds, 1)}s")
    lines.append("")

    # Summary table
    lines.append("## Summary")
    lines.append("")
    lines.append("| Section | Critical | High | Medium | Low | Total |")
    lines.append("|---------|----------|------|--------|-----|-------|")
    for key, findings in sections.items():
        s = FindingSummary.from_findings(findings)
        lines.append(
            f"| {SECTION_TITLES[key]} | {s.critical} | {s.high} | {s.medium} | {s.low} | {s.total} |"
        )
    lines.append("")

    lines.append("## Tested Flows")
    lines.append("")
    if summary.tested_flows:
        for flow in summary.tested_flows:
            lines.append(f"- {flow}")
    else:
        lines.append("_No routes detected._")
    lines.append("")

    all_sorted = [f for findings in sections.values() for f in findings]
    all_sorted.sort(key=lambda f: -f.severity.rank)

    if all_sorted:
        lines.append("## Findings Detail")
        lines.append("")
        for f in all_sorted:
            lines.append(f"### {f.id}: {f.title} [{f.severity.value}]")
            loc = f.file
            if f.line:
                loc += f":{f.line}"
            lines.append(f"**Location:** `{loc}`")
            lines.append(f"**Category:** {f.category} ({f.reproducibility.value})")
            lines.append(f"\n{f.root_cause}")
            lines.append(f"\n**Impact:** {f.impact}")
            lines.append(f"**Fix:** {f.suggested_fix}")
            lines.append("")

    if report.qa_recommendations:
        lines.append("## QA Recommendations")
        lines.append("")
        for rec in report.qa_recommendations:
            lines.append(f"- {rec}")
        lines.append("")

    lines.append("---")
    lines.append(f"*Generated by Flow Auditor v{__version__} at {timestamp}*")

    return "\n".join(lines)
