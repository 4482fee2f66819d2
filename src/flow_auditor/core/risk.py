"""Risk scoring and exit code mapping."""

from __future__ import annotations

from typing import Optional, Sequence

from ..models.finding import Finding, Severity
from ..models.report import RiskLevel

HIGH_RISK_THRESHOLD = 5


def calculate_risk(bugs: Sequence[Finding], security_issues: Sequence[Finding]) -> RiskLevel:
    """Calculate the overall project risk from bug and security findings.

    - Critical: any Critical bug or security finding
    - High: more than 5 bugs or more than 5 security findings
    - Medium: everything else
    """
    has_critical = any(
        f.severity == Severity.CRITICAL for f in (*bugs, *security_issues)
    )
    if has_critical:
        return RiskLevel.CRITICAL
    if len(bugs) > HIGH_RISK_THRESHOLD or len(security_issues) > HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    return RiskLevel.MEDIUM


def get_exit_code(risk: RiskLevel, exit_codes: Optional[dict] = None) -> int:
    """Map a risk level to a CI exit code."""
    codes = {"medium": 0, "critical": 1, "high": 2}
    if isinstance(exit_codes, dict):
        codes.update({str(k).lower(): v for k, v in exit_codes.items() if isinstance(v, int)})
    return codes.get(risk.value.lower(), 0)
