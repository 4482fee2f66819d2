"""Flow Auditor - heuristic project audit for React/JS codebases."""

__version__ = "1.0.0"
