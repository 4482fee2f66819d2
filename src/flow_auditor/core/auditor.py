"""Audit orchestrator.

Collects project files once, runs every enabled detector over them in turn,
and merges the results into a single AuditReport.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional, Union

from rich.console import Console

from ..detectors import ALL_DETECTOR_KEYS, DETECTOR_DEFS, Detector
from ..formatters import OUTPUT_FORMATS, render_report
from ..models.finding import Finding, FindingSummary
from ..models.report import AuditReport, FlowResult, ProjectSummary
from .collector import collect_files
from .config import DEFAULT_CONFIG, get_effective_config, get_enabled_detectors, get_scan_list
from .risk import calculate_risk, get_exit_code

console = Console(stderr=True)

TECH_STACK = "React (Detected)"

QA_RECOMMENDATIONS = (
    "Ensure all critical flows have integration tests.",
    "Review security headers and CSP.",
)

EXIT_NO_PROJECT = 11
EXIT_BAD_PATH = 12
EXIT_AUDIT_FAILED = 13


class AuditError(Exception):
    """Raised when an audit cannot run or a detector fails outright."""


def build_report(results: dict[str, Union[list[Finding], FlowResult]]) -> AuditReport:
    """Merge per-detector results into the final report.

    ``bugs`` is bug findings, then flow findings, then responsiveness
    findings. Risk is scored from bug-detector and security findings only.
    """
    bug_findings: list[Finding] = list(results.get("bugs") or [])
    security_issues: list[Finding] = list(results.get("security") or [])
    performance_issues: list[Finding] = list(results.get("performance") or [])
    responsive_issues: list[Finding] = list(results.get("responsive") or [])
    flow = results.get("flow") or FlowResult()

    return AuditReport(
        project_summary=ProjectSummary(
            tech_stack=TECH_STACK,
            tested_flows=list(flow.tested_flows),
            overall_risk_level=calculate_risk(bug_findings, security_issues),
        ),
        bugs=[*bug_findings, *flow.issues, *responsive_issues],
        performance_issues=performance_issues,
        security_issues=security_issues,
        missing_tests=[],
        qa_recommendations=list(QA_RECOMMENDATIONS),
    )


class ProjectAuditor:
    """Runs the detector battery over one project tree."""

    def __init__(
        self,
        project_path: Union[str, Path],
        config: Optional[dict] = None,
        detectors: Optional[list[str]] = None,
    ):
        self.project_path = Path(project_path)
        self.config = config if config is not None else DEFAULT_CONFIG
        self.detector_keys = detectors if detectors is not None else list(ALL_DETECTOR_KEYS)

    def _resolve_detectors(self) -> list[str]:
        unknown = [k for k in self.detector_keys if k not in DETECTOR_DEFS]
        if unknown:
            raise AuditError(f"Unknown detector(s): {', '.join(unknown)}")
        # Registry order, whatever order they were requested in
        requested = [k for k in ALL_DETECTOR_KEYS if k in self.detector_keys]
        enabled = get_enabled_detectors(self.config, requested)
        if not enabled:
            raise AuditError("No detectors enabled")
        return enabled

    def collect_files(self) -> list[Path]:
        return collect_files(
            self.project_path,
            extra_exclude_dirs=get_scan_list(self.config, "exclude_dirs"),
            extra_extensions=get_scan_list(self.config, "extensions"),
        )

    async def audit(self, console: Optional[Console] = None) -> AuditReport:
        if not self.project_path.exists():
            raise AuditError(f"Project path does not exist: {self.project_path}")
        if not self.project_path.is_dir():
            raise AuditError(f"Project path is not a directory: {self.project_path}")

        keys = self._resolve_detectors()
        files = self.collect_files()
        if console:
            console.print(f"  [green]OK[/green] Collected {len(files)} source files")

        results: dict[str, Union[list[Finding], FlowResult]] = {}
        for key in keys:
            detector: Detector = DETECTOR_DEFS[key](self.project_path, files)
            started = time.time()
            try:
                result = await detector.analyze()
            except Exception as e:
                raise AuditError(f"{detector.name} failed: {e}") from e
            results[key] = result

            if console:
                findings = result.issues if isinstance(result, FlowResult) else result
                s = FindingSummary.from_findings(findings)
                console.print(
                    f"  [green]OK[/green] {detector.name}: {s.total} findings "
                    f"({s.critical}C/{s.high}H/{s.medium}M/{s.low}L) "
                    f"in {round(time.time() - started, 2)}s"
                )

        return build_report(results)


def _split_keys(value: Optional[list[str]]) -> list[str]:
    return [v.strip().lower() for v in (value or []) if v and v.strip()]


async def run_audit(
    project_path: Optional[Path],
    output_format: Optional[str] = None,
    output_path: Optional[Path] = None,
    ci: bool = False,
    detectors: Optional[list[str]] = None,
    skip_detectors: Optional[list[str]] = None,
) -> int:
    """Audit a project from the command line. Returns exit code."""
    start_time = time.time()

    if project_path is None:
        console.print("  [red]ERROR[/red] No project path given")
        return EXIT_NO_PROJECT

    project_path = Path(project_path).resolve()
    if not project_path.is_dir():
        console.print(f"  [red]ERROR[/red] Project path is not a directory: {project_path}")
        return EXIT_BAD_PATH

    cli_overrides = {"output": {"format": output_format}} if output_format else None
    config = get_effective_config(project_path, cli_overrides)

    output = config.get("output")
    output_format = output.get("format") if isinstance(output, dict) else None
    if output_format not in OUTPUT_FORMATS:
        console.print(f"  [yellow]WARN[/yellow] Unknown output format {output_format!r}, using json")
        output_format = "json"

    requested = _split_keys(detectors) or list(ALL_DETECTOR_KEYS)
    skipped = set(_split_keys(skip_detectors))
    unknown = [k for k in (*requested, *skipped) if k not in DETECTOR_DEFS]
    if unknown:
        console.print(f"  [yellow]WARN[/yellow] Ignoring unknown detector(s): {', '.join(unknown)}")
    selected = [k for k in requested if k in DETECTOR_DEFS and k not in skipped]
    if not selected:
        console.print("  [red]ERROR[/red] No valid detectors to run")
        return EXIT_NO_PROJECT

    console.print(f"  [cyan]Starting audit of {project_path}...[/cyan]")

    auditor = ProjectAuditor(project_path, config=config, detectors=selected)
    try:
        report = await auditor.audit(console=console)
    except AuditError as e:
        console.print(f"  [red]ERROR[/red] Audit failed: {e}")
        return EXIT_AUDIT_FAILED

    duration = time.time() - start_time
    rendered = render_report(
        report,
        output_format=output_format,
        project_path=str(project_path),
        duration_seconds=duration,
    )

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        console.print(f"  [green]OK[/green] Report written to {output_path}")
    else:
        sys.stdout.write(rendered + "\n")

    risk = report.project_summary.overall_risk_level
    risk_colors = {"Medium": "yellow", "High": "red", "Critical": "bold red"}
    color = risk_colors.get(risk.value, "white")
    console.print(f"  Audit complete! Risk level: [{color}]{risk.value}[/{color}]")

    if ci:
        exit_code = get_exit_code(risk, (config.get("ci") or {}).get("exit_codes"))
        console.print(f"  CI Mode: Exiting with code {exit_code}")
        return exit_code

    return 0
