"""
Writes corrected text back to disk.

The walker only precomputes corrections; this module commits them, with
optional ``.bak`` backups and a dry-run mode that writes nothing.
"""

import logging
import shutil
from dataclasses import dataclass
from typing import Iterable, List, Optional

from errorfinder.core.findings import AnalyzedFile
from errorfinder.utils import printable


logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Result of writing one corrected file."""
    path: str
    success: bool
    fixes: int
    diff: str
    error_message: Optional[str] = None
    backup_path: Optional[str] = None


def write_corrections(
    files: Iterable[AnalyzedFile],
    backup: bool = True,
    dry_run: bool = False,
) -> List[WriteResult]:
    """
    Write the corrected text of every changed file.

    Files without changes are skipped. A file that cannot be written is
    reported as a failed result; the remaining files are still written.
    """
    results = []

    for analyzed in files:
        if not analyzed.has_changes:
            continue

        result = WriteResult(
            path=analyzed.path,
            success=True,
            fixes=analyzed.fixable_count,
            diff=analyzed.diff(),
        )
        results.append(result)

        if dry_run:
            continue

        try:
            if backup:
                result.backup_path = analyzed.path + '.bak'
                shutil.copy2(analyzed.path, result.backup_path)

            with open(analyzed.path, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
                f.write(analyzed.corrected_text)
        except (OSError, UnicodeError) as e:
            logger.warning("Could not write %s: %s", analyzed.path, e)
            result.success = False
            result.error_message = f"Error modifying file: {e}"

    return results


def format_fix_report(results: List[WriteResult], dry_run: bool = False) -> str:
    """
    Format write results as a human-readable report.
    """
    written = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    lines = [
        "=" * 60,
        "FIX REPORT" + (" (dry run)" if dry_run else ""),
        "=" * 60,
        "",
        f"Files changed: {len(written)}",
        f"Fixes applied: {sum(r.fixes for r in written)}",
        f"Failed: {len(failed)}",
        "",
    ]

    for result in results:
        lines.append("-" * 60)
        status = "would fix" if dry_run else ("fixed" if result.success else "failed")
        lines.append(f"{result.path} ({status}, {result.fixes} fixes)")
        if result.backup_path and result.success:
            lines.append(f"  Backup: {result.backup_path}")
        if result.error_message:
            lines.append(f"  Reason: {result.error_message}")
        if result.diff:
            lines.append("")
            for line in printable(result.diff).splitlines():
                lines.append(f"  {line}")
        lines.append("")

    if not results:
        lines.append("Nothing to fix.")

    lines.append("=" * 60)
    return '\n'.join(lines)
