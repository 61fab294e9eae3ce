"""Core scanning engine and data structures."""

from errorfinder.core.findings import Finding, Severity, AnalyzedFile, ProjectStats
from errorfinder.core.rules import Rule, RuleRegistry, UnknownLanguageError, registry
from errorfinder.core.scanner import scan
from errorfinder.core.engine import (
    ProjectWalker, ProjectReport, SourceFile, analyze_project, apply_fixes
)

__all__ = [
    "Finding",
    "Severity",
    "AnalyzedFile",
    "ProjectStats",
    "Rule",
    "RuleRegistry",
    "UnknownLanguageError",
    "registry",
    "scan",
    "ProjectWalker",
    "ProjectReport",
    "SourceFile",
    "analyze_project",
    "apply_fixes",
]
