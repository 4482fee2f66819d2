"""JUnit XML formatter for CI/CD integration."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from xml.dom import minidom
from xml.etree import ElementTree as ET

from ..models.finding import Finding, Severity
from ..models.report import AuditReport

DEFAULT_FAIL_ON = (Severity.CRITICAL, Severity.HIGH)


def convert_report_to_junit(report: AuditReport) -> dict[str, list[Finding]]:
    """Group report findings into one suite per report section."""
    return {
        "bugs": list(report.bugs),
        "security_issues": list(report.security_issues),
        "performance_issues": list(report.performance_issues),
        "missing_tests": list(report.missing_tests),
    }


def render_junit(
    report: AuditReport,
    fail_on: Optional[list[Severity]] = None,
    project_name: str = "Flow Auditor",
    duration: float = 0,
) -> str:
    """Render findings as JUnit XML.

    Args:
        report: The audit report to render.
        fail_on: Severities to mark as failures. Default: Critical, High.
        project_name: Name for the testsuites element.
        duration: Total duration in seconds.

    Returns:
        Pretty-printed XML document.
    """
    fail_set = set(fail_on if fail_on is not None else DEFAULT_FAIL_ON)

    testsuites = ET.Element("testsuites")
    testsuites.set("name", project_name)
    testsuites.set("timestamp", datetime.now().strftime("%Y-%m-%dT%H:%M:%S"))

    total_tests = 0
    total_failures = 0

    for section, findings in convert_report_to_junit(report).items():
        if not findings:
            continue

        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", section)
        testsuite.set("tests", str(len(findings)))

        suite_failures = 0

        for finding in findings:
            total_tests += 1

            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", f"{finding.id}: {finding.title}")
            testcase.set("classname", finding.category)
            testcase.set("file", finding.file)
            testcase.set("line", str(finding.line))

            if finding.severity in fail_set:
                total_failures += 1
                suite_failures += 1

                failure = ET.SubElement(testcase, "failure")
                failure.set("message", f"[{finding.severity.value}] {finding.title}")
                failure.set("type", finding.severity.value.lower())
                failure.text = "\n".join([
                    f"Severity: {finding.severity.value}",
                    f"File: {finding.file}",
                    f"Line: {finding.line}",
                    f"\nRoot cause:\n{finding.root_cause}",
                    f"\nImpact:\n{finding.impact}",
                    f"\nRemediation:\n{finding.suggested_fix}",
                ])

        testsuite.set("failures", str(suite_failures))
        testsuite.set("errors", "0")
        testsuite.set("skipped", "0")

    testsuites.set("tests", str(total_tests))
    testsuites.set("failures", str(total_failures))
    testsuites.set("errors", "0")
    if duration > 0:
        testsuites.set("time", str(round(duration, 2)))

    rough = ET.tostring(testsuites, encoding="unicode")
    return minidom.parseString(rough).toprettyxml(indent="  ")
