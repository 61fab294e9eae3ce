"""
Finding data structures for the error finder.

This module defines the records produced by a scan: individual findings,
the per-file analysis record used by the project walker, and the
aggregate statistics folded over a batch of files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Iterable
import json


class Severity(Enum):
    """Severity levels for findings."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __lt__(self, other):
        order = [Severity.INFO, Severity.WARNING, Severity.ERROR]
        return order.index(self) < order.index(other)

    def __le__(self, other):
        return self == other or self < other


@dataclass
class Finding:
    """
    A single located rule violation produced by scanning a text buffer.
    """
    rule_id: str
    line: int
    severity: Severity
    message: str
    snippet: str = ""
    fixable: bool = False
    column: int = 1
    language: str = "unknown"
    fix_description: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.severity, str):
            self.severity = Severity(self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert finding to a dictionary."""
        result = {
            "rule_id": self.rule_id,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "message": self.message,
            "snippet": self.snippet,
            "fixable": self.fixable,
            "language": self.language,
        }
        if self.fix_description:
            result["fix_description"] = self.fix_description
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        """Create a Finding from a dictionary."""
        return cls(**data)


@dataclass
class AnalyzedFile:
    """
    Per-file record owned by the project walker for one batch run.

    ``corrected_text`` holds the precomputed fixed version of the file; it
    equals ``original_text`` until some fixable finding exists.
    """
    path: str
    language: str
    original_text: str
    corrected_text: str
    findings: List[Finding] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.original_text.split("\n"))

    @property
    def fixable_count(self) -> int:
        return sum(1 for f in self.findings if f.fixable)

    @property
    def has_changes(self) -> bool:
        return self.corrected_text != self.original_text

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    def diff(self) -> str:
        """Unified diff between the original and the corrected text."""
        from errorfinder.remediation.resolver import generate_diff

        return generate_diff(self.original_text, self.corrected_text, self.path)

    def to_dict(self, include_text: bool = False) -> Dict[str, Any]:
        result = {
            "path": self.path,
            "language": self.language,
            "lines": self.line_count,
            "fixable": self.fixable_count,
            "has_changes": self.has_changes,
            "findings": [f.to_dict() for f in self.findings],
        }
        if include_text:
            result["original_text"] = self.original_text
            result["corrected_text"] = self.corrected_text
        return result


@dataclass
class ProjectStats:
    """Aggregate counts derived from a set of analyzed files."""
    total_files: int = 0
    total_lines: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0
    fixable: int = 0
    languages: Dict[str, int] = field(default_factory=dict)

    @property
    def total_findings(self) -> int:
        return self.errors + self.warnings + self.infos

    @classmethod
    def from_files(cls, files: Iterable[AnalyzedFile]) -> "ProjectStats":
        """Fold a set of analyzed files into fresh statistics."""
        stats = cls()
        for analyzed in files:
            stats.total_files += 1
            stats.total_lines += analyzed.line_count
            stats.languages[analyzed.language] = stats.languages.get(analyzed.language, 0) + 1
            for finding in analyzed.findings:
                if finding.severity == Severity.ERROR:
                    stats.errors += 1
                elif finding.severity == Severity.WARNING:
                    stats.warnings += 1
                else:
                    stats.infos += 1
                if finding.fixable:
                    stats.fixable += 1
        return stats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "total_findings": self.total_findings,
            "by_severity": {
                "error": self.errors,
                "warning": self.warnings,
                "info": self.infos,
            },
            "fixable": self.fixable,
            "languages": dict(sorted(self.languages.items())),
        }
