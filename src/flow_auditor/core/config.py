"""3-layer configuration system for Flow Auditor.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.flow-audit/config.yaml)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

CONFIG_DIR = ".flow-audit"
CONFIG_FILE = "config.yaml"

DEFAULT_CONFIG: dict = {
    "scan": {
        "exclude_dirs": [],
        "extensions": [],
    },
    "detectors": {
        "bugs": {"enabled": True},
        "security": {"enabled": True},
        "flow": {"enabled": True},
        "performance": {"enabled": True},
        "responsive": {"enabled": True},
    },
    "output": {
        "format": "json",
    },
    "ci": {
        "exit_codes": {"medium": 0, "critical": 1, "high": 2},
    },
}

STARTER_CONFIG = """\
# Flow Auditor project configuration

scan:
  # Directory names skipped in addition to the built-in list
  exclude_dirs: []
  # File extensions scanned in addition to the built-in list
  extensions: []

detectors:
  bugs:
    enabled: true
  security:
    enabled: true
  flow:
    enabled: true
  performance:
    enabled: true
  responsive:
    enabled: true

output:
  # json, markdown or junit; --output-format overrides it
  format: json

ci:
  exit_codes:
    medium: 0
    critical: 1
    high: 2
"""


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def get_config_path(project_path: Path) -> Path:
    return Path(project_path) / CONFIG_DIR / CONFIG_FILE


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .flow-audit/config.yaml."""
    config_path = get_config_path(project_path)
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        loaded = yaml.safe_load(content)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}
    return loaded if isinstance(loaded, dict) else {}


def write_starter_config(project_path: Path) -> Optional[Path]:
    """Create .flow-audit/config.yaml. Returns None if one already exists."""
    config_path = get_config_path(project_path)
    if config_path.exists():
        return None
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(STARTER_CONFIG, encoding="utf-8")
    return config_path


def get_enabled_detectors(config: dict, candidates: list[str]) -> list[str]:
    """Filter detector keys down to the ones enabled in config, keeping order.

    An entry may be a mapping with an ``enabled`` flag or a bare boolean.
    Anything else leaves the detector enabled.
    """
    detectors_config = config.get("detectors")
    if not isinstance(detectors_config, dict):
        detectors_config = {}
    enabled: list[str] = []
    for key in candidates:
        entry = detectors_config.get(key)
        if isinstance(entry, dict):
            entry = entry.get("enabled", True)
        if entry is not False:
            enabled.append(key)
    return enabled


def get_scan_list(config: dict, key: str) -> list[str]:
    """Read a ``scan`` list setting. A single string counts as a one-item list."""
    scan = config.get("scan")
    value = scan.get(key) if isinstance(scan, dict) else None
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    return []


def get_effective_config(
    project_path: Path,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for an audit."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    project_config = load_project_config(project_path)
    if project_config:
        config = deep_merge(config, project_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config
