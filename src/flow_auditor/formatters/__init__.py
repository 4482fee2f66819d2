"""Report renderers."""

from __future__ import annotations

from ..models.report import AuditReport
from .junit import render_junit
from .markdown import generate_markdown_report

OUTPUT_FORMATS = ("json", "markdown", "junit")


def render_report(
    report: AuditReport,
    output_format: str = "json",
    project_path: str = "",
    duration_seconds: float = 0,
) -> str:
    """Render a report in one of OUTPUT_FORMATS."""
    if output_format == "json":
        return report.to_json()
    if output_format == "markdown":
        return generate_markdown_report(
            report, project_path=project_path, duration_seconds=duration_seconds
        )
    if output_format == "junit":
        return render_junit(report, duration=duration_seconds)
    raise ValueError(f"Unknown output format: {output_format}")
