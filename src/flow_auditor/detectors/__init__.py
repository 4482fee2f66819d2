"""Detector registry."""

from __future__ import annotations

from .base import Detector
from .bugs import BugDetector
from .flow import FlowAnalyzer
from .performance import PerformanceAnalyzer
from .responsive import ResponsiveDetector
from .security import SecurityScanner

# Run order: bugs, security, flow, performance, responsive
DETECTOR_DEFS: dict[str, type] = {
    BugDetector.key: BugDetector,
    SecurityScanner.key: SecurityScanner,
    FlowAnalyzer.key: FlowAnalyzer,
    PerformanceAnalyzer.key: PerformanceAnalyzer,
    ResponsiveDetector.key: ResponsiveDetector,
}

ALL_DETECTOR_KEYS = list(DETECTOR_DEFS)

__all__ = [
    "ALL_DETECTOR_KEYS",
    "DETECTOR_DEFS",
    "BugDetector",
    "Detector",
    "FlowAnalyzer",
    "PerformanceAnalyzer",
    "ResponsiveDetector",
    "SecurityScanner",
]
