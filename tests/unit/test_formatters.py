"""Tests for formatters/."""

from __future__ import annotations

from xml.etree import ElementTree as ET

import pytest

from flow_auditor.formatters import render_report
from flow_auditor.formatters.junit import render_junit
from flow_auditor.formatters.markdown import generate_markdown_report
from flow_auditor.models.finding import Finding, Severity
from flow_auditor.models.report import AuditReport, ProjectSummary, RiskLevel


def _finding(fid: str, severity: Severity, title: str = "Issue", line: int = 4) -> Finding:
    return Finding(
        id=fid,
        title=title,
        file="src/app.js",
        line=line,
        severity=severity,
        category="Security",
        root_cause="root",
        impact="impact",
        suggested_fix="fix it",
    )


@pytest.fixture
def sample_report() -> AuditReport:
    return AuditReport(
        project_summary=ProjectSummary(
            tech_stack="React (Detected)",
            tested_flows=["User navigates to /home"],
            overall_risk_level=RiskLevel.CRITICAL,
        ),
        bugs=[
            _finding("BUG-1", Severity.LOW, "Console Log Detected"),
            _finding("BUG-2", Severity.CRITICAL, "Hook Called in Loop", line=0),
        ],
        security_issues=[_finding("SEC-1", Severity.HIGH, "Eval Usage Detected")],
        performance_issues=[_finding("PERF-1", Severity.MEDIUM, "String concatenation in loop")],
        qa_recommendations=["Review security headers and CSP."],
    )


class TestMarkdownReport:
    def test_header_and_risk(self, sample_report: AuditReport):
        md = generate_markdown_report(sample_report, project_path="/tmp/app", duration_seconds=1.25)
        assert md.startswith("# Project Audit Report")
        assert "**Risk Level:** Critical" in md
        assert "**Project:** /tmp/app" in md

    def test_findings_sorted_by_severity(self, sample_report: AuditReport):
        md = generate_markdown_report(sample_report)
        order = [md.index(fid) for fid in ("BUG-2:", "SEC-1:", "PERF-1:", "BUG-1:")]
        assert order == sorted(order)

    def test_project_wide_location_has_no_line(self, sample_report: AuditReport):
        md = generate_markdown_report(sample_report)
        assert "**Location:** `src/app.js`\n" in md
        assert "**Location:** `src/app.js:4`" in md

    def test_flows_and_recommendations(self, sample_report: AuditReport):
        md = generate_markdown_report(sample_report)
        assert "- User navigates to /home" in md
        assert "- Review security headers and CSP." in md

    def test_summary_table(self, sample_report: AuditReport):
        md = generate_markdown_report(sample_report)
        assert "| Bugs | 1 | 0 | 0 | 1 | 2 |" in md
        assert "| Security | 0 | 1 | 0 | 0 | 1 |" in md


class TestJunit:
    def test_counts(self, sample_report: AuditReport):
        root = ET.fromstring(render_junit(sample_report))
        assert root.get("tests") == "4"
        # Critical + High
        assert root.get("failures") == "2"
        assert [s.get("name") for s in root.findall("testsuite")] == [
            "bugs", "security_issues", "performance_issues",
        ]

    def test_custom_fail_on(self, sample_report: AuditReport):
        root = ET.fromstring(render_junit(sample_report, fail_on=[Severity.LOW]))
        assert len(root.findall(".//failure")) == 1

    def test_testcase_attributes(self, sample_report: AuditReport):
        root = ET.fromstring(render_junit(sample_report))
        case = root.find("testsuite/testcase")
        assert case.get("name") == "BUG-1: Console Log Detected"
        assert case.get("file") == "src/app.js"
        assert case.get("line") == "4"


class TestRenderReport:
    def test_json(self, sample_report: AuditReport):
        assert render_report(sample_report, "json") == sample_report.to_json()

    def test_unknown_format(self, sample_report: AuditReport):
        with pytest.raises(ValueError, match="Unknown output format"):
            render_report(sample_report, "pdf")
