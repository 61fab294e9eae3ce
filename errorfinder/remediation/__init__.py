"""
Fix resolution and application.

Computes corrected buffers from findings and writes them back to disk.
"""

from errorfinder.remediation.resolver import (
    FixOutcome, generate_diff, plan_fixes, repair, resolve_fixes
)
from errorfinder.remediation.writer import WriteResult, format_fix_report, write_corrections

__all__ = [
    "FixOutcome",
    "plan_fixes",
    "resolve_fixes",
    "repair",
    "generate_diff",
    "WriteResult",
    "write_corrections",
    "format_fix_report",
]
