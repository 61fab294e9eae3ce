"""
Code Error Finder

A rule-based static analysis and auto-fix engine for source text. Scans
JavaScript, TypeScript, HTML, CSS, JSON, Python, PHP and SQL for common
mistakes, computes safe line-level fixes and reports project-wide
statistics.
"""

__version__ = "1.0.0"
__author__ = "Error Finder Team"

from errorfinder.core.findings import Finding, Severity, AnalyzedFile, ProjectStats
from errorfinder.core.scanner import scan
from errorfinder.core.engine import ProjectWalker, analyze_project, apply_fixes
from errorfinder.rules import rules_for
from errorfinder.remediation.resolver import resolve_fixes
from errorfinder.config import ScanConfig

__all__ = [
    "rules_for",
    "scan",
    "resolve_fixes",
    "analyze_project",
    "apply_fixes",
    "ProjectWalker",
    "Finding",
    "Severity",
    "AnalyzedFile",
    "ProjectStats",
    "ScanConfig",
]
