"""
Configuration system for the error finder.

Supports YAML and JSON configuration files for excluding paths,
disabling rules and customizing output and fix behavior.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field, asdict

import yaml

from errorfinder.core.findings import Severity


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".errorfinder.yaml",
    ".errorfinder.yml",
    ".errorfinder.json",
    "errorfinder.yaml",
    "errorfinder.yml",
    "errorfinder.json",
]

OUTPUT_FORMATS = ("text", "json", "sarif")


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "text"  # text, json, sarif
    output_file: Optional[str] = None
    verbose: bool = False
    color: bool = True
    show_snippets: bool = True


@dataclass
class FixConfig:
    """Configuration for writing fixes to disk."""
    backup: bool = True
    dry_run: bool = False


@dataclass
class ScanConfig:
    """
    Main configuration for the error finder.

    Example YAML config:

    ```yaml
    scan:
      exclude:
        - "dist/**"
        - "*.generated.js"
      max_file_size: 10485760
      max_workers: 4

    rules:
      disabled:
        - JS-013
        - PY-011

    severity_threshold: info  # error, warning, info

    output:
      format: text
      verbose: false
      color: true
      show_snippets: true

    fix:
      backup: true
      dry_run: false
    ```
    """
    # Scan settings
    target: str = "."
    exclude_patterns: List[str] = field(default_factory=lambda: [
        "dist/**",
        "build/**",
        "coverage/**",
    ])
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    max_workers: int = 4

    # Rule settings
    disabled_rules: List[str] = field(default_factory=list)
    severity_threshold: str = "info"  # error, warning, info

    # Output settings
    output: OutputConfig = field(default_factory=OutputConfig)

    # Fix settings
    fix: FixConfig = field(default_factory=FixConfig)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError for settings that cannot be used."""
        try:
            Severity(self.severity_threshold)
        except ValueError:
            raise ValueError(
                f"Invalid severity_threshold: {self.severity_threshold!r} "
                f"(expected error, warning or info)"
            )
        if self.output.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid output format: {self.output.format!r} "
                f"(expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ValueError(f"max_workers must be a positive integer, got {self.max_workers!r}")
        if not isinstance(self.max_file_size, int) or self.max_file_size < 1:
            raise ValueError(f"max_file_size must be a positive integer, got {self.max_file_size!r}")

    @property
    def threshold(self) -> Severity:
        return Severity(self.severity_threshold)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    def to_walker_config(self) -> Dict[str, Any]:
        """Convert to project walker configuration format."""
        return {
            "max_file_size": self.max_file_size,
            "max_workers": self.max_workers,
            "exclude_patterns": self.exclude_patterns,
            "disabled_rules": self.disabled_rules,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Handle nested configs
        if "output" in data and isinstance(data["output"], dict):
            data["output"] = _build(OutputConfig, data["output"])
        if "fix" in data and isinstance(data["fix"], dict):
            data["fix"] = _build(FixConfig, data["fix"])
        if "rules" in data and isinstance(data["rules"], dict):
            data["disabled_rules"] = list(data["rules"].get("disabled") or [])

        # Map some common alternative names
        if "exclude" in data:
            data["exclude_patterns"] = list(data.pop("exclude") or [])

        return _build(cls, data)


def _build(cls, data: Dict[str, Any]):
    # Filter to only known fields
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}
    filtered_data = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered_data)


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            # YAML is a superset of JSON, so this covers unknown suffixes too
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid configuration file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_scan_config(path: Optional[str] = None, start_dir: str = ".") -> ScanConfig:
    """
    Load a ScanConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ScanConfig()

    data = load_config(path)

    # Handle nested 'scan' section
    if "scan" in data:
        scan_data = data.pop("scan") or {}
        data.update(scan_data)

    return ScanConfig.from_dict(data)


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {
        "scan": {
            "exclude": [
                "dist/**",
                "build/**",
                "coverage/**",
            ],
            "max_file_size": 10485760,
            "max_workers": 4,
        },
        "rules": {
            "disabled": [],
        },
        "severity_threshold": "info",
        "output": {
            "format": "text",
            "verbose": False,
            "color": True,
            "show_snippets": True,
        },
        "fix": {
            "backup": True,
            "dry_run": False,
        },
    }

    return yaml.dump(config, default_flow_style=False, sort_keys=False)
