from .finding import Finding, FindingSummary, Reproducibility, Severity
from .report import AuditReport, FlowResult, ProjectSummary, RiskLevel

__all__ = [
    "AuditReport",
    "Finding",
    "FindingSummary",
    "FlowResult",
    "ProjectSummary",
    "Reproducibility",
    "RiskLevel",
    "Severity",
]
