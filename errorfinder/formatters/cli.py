"""
CLI output formatter for human-readable results.
"""

from typing import Dict, List
import sys

from errorfinder.core.engine import ProjectReport
from errorfinder.core.findings import AnalyzedFile, Finding, Severity
from errorfinder.utils import printable


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


class CLIFormatter:
    """
    Formats analysis reports for human-readable CLI output.
    """

    SEVERITY_COLORS: Dict[Severity, str] = {
        Severity.ERROR: Colors.RED,
        Severity.WARNING: Colors.YELLOW,
        Severity.INFO: Colors.BLUE,
    }

    def __init__(
        self,
        use_color: bool = True,
        verbose: bool = False,
        show_snippets: bool = True,
        min_severity: Severity = Severity.INFO,
    ):
        self.use_color = use_color and supports_color()
        self.verbose = verbose
        self.show_snippets = show_snippets
        self.min_severity = min_severity

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _severity_label(self, severity: Severity) -> str:
        """Get a formatted severity label."""
        label = f"[{severity.value.upper()}]"
        return self._color(f"{label:<9}", self.SEVERITY_COLORS.get(severity, ""))

    def _visible(self, findings: List[Finding]) -> List[Finding]:
        return [f for f in findings if self.min_severity <= f.severity]

    def format_result(self, report: ProjectReport) -> str:
        """Format a complete project report."""
        stats = report.stats
        lines = []

        # Header
        lines.append("")
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append(self._color(" CODE ANALYSIS RESULTS ", Colors.BOLD))
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append("")

        # Summary
        lines.append(self._color("Summary", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))
        lines.append(f"  Files analyzed:    {stats.total_files}")
        lines.append(f"  Lines:             {stats.total_lines}")
        languages = ", ".join(f"{lang} ({count})" for lang, count in sorted(stats.languages.items()))
        lines.append(f"  Languages:         {languages or '-'}")
        if self.verbose and report.skipped:
            lines.append(f"  Skipped:           {len(report.skipped)}")
        if report.cancelled:
            lines.append(self._color("  Analysis was cancelled; results are partial.", Colors.YELLOW))
        lines.append("")

        # Findings summary
        lines.append(self._color("Findings", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))

        if stats.total_files == 0:
            lines.append(self._color("  No files were analyzed.", Colors.YELLOW))
        elif stats.total_findings == 0:
            lines.append(self._color("  No issues found!", Colors.GREEN))
        else:
            lines.append(f"  {self._severity_label(Severity.ERROR)} {stats.errors}")
            lines.append(f"  {self._severity_label(Severity.WARNING)} {stats.warnings}")
            lines.append(f"  {self._severity_label(Severity.INFO)} {stats.infos}")
            lines.append(f"  Auto-fixable:      {stats.fixable}")

        lines.append("")

        # Detailed findings
        files = [f for f in report.files if self._visible(f.findings)]
        if files:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" DETAILED FINDINGS ", Colors.BOLD))
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append("")

            for analyzed in files:
                lines.extend(self._format_file(analyzed))
                lines.append("")

        # Errors
        if report.errors:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" ERRORS ", Colors.RED))
            lines.append(self._color("=" * 70, Colors.DIM))
            for error in report.errors:
                lines.append(f"  - {error}")
            lines.append("")

        return "\n".join(lines)

    def _format_file(self, analyzed: AnalyzedFile) -> List[str]:
        lines = [self._color(f"{analyzed.path} ({analyzed.language})", Colors.CYAN)]
        for finding in self._visible(analyzed.findings):
            lines.extend(self._format_finding(finding))
        return lines

    def _format_finding(self, finding: Finding) -> List[str]:
        """Format a single finding."""
        location = f"{finding.line}:{finding.column}"
        fixable = self._color(" (fixable)", Colors.GREEN) if finding.fixable else ""
        lines = [
            f"  {location:>8}  {self._severity_label(finding.severity)} "
            f"{finding.message}{fixable}  {self._color(finding.rule_id, Colors.DIM)}"
        ]

        if self.show_snippets and finding.snippet:
            lines.append(self._color(f"            {printable(finding.snippet)}", Colors.DIM))

        if self.verbose and finding.fix_description:
            lines.append(self._color(f"            Fix: {finding.fix_description}", Colors.GREEN))

        return lines

    def format_findings(self, findings: List[Finding]) -> str:
        """Format a flat list of findings, as for a single buffer."""
        visible = self._visible(findings)
        if not visible:
            return self._color("No issues found!", Colors.GREEN)
        lines = []
        for finding in visible:
            lines.extend(self._format_finding(finding))
        return "\n".join(lines)
