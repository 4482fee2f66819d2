"""Audit report data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .finding import Finding


class RiskLevel(str, Enum):
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class FlowResult(BaseModel):
    tested_flows: list[str] = []
    issues: list[Finding] = []
    api_endpoints: list[str] = []


class ProjectSummary(BaseModel):
    tech_stack: str
    tested_flows: list[str] = []
    overall_risk_level: RiskLevel = RiskLevel.MEDIUM


class AuditReport(BaseModel):
    project_summary: ProjectSummary
    bugs: list[Finding] = []
    performance_issues: list[Finding] = []
    security_issues: list[Finding] = []
    missing_tests: list[Finding] = []
    qa_recommendations: list[str] = []

    def to_json(self, indent: int = 2) -> str:
        """Serialize to indented JSON using the report's field names."""
        return self.model_dump_json(indent=indent)
