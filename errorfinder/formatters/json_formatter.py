"""
JSON output formatter for machine-readable results.
"""

import json
from typing import List

from errorfinder.core.engine import ProjectReport
from errorfinder.core.findings import Finding, Severity


class JSONFormatter:
    """
    Formats analysis reports as JSON for machine consumption.
    """

    def __init__(self, indent: int = 2, min_severity: Severity = Severity.INFO):
        self.indent = indent
        self.min_severity = min_severity

    def _keep(self, finding: dict) -> bool:
        return self.min_severity <= Severity(finding["severity"])

    def format_result(self, report: ProjectReport) -> str:
        """Format a complete project report as JSON."""
        data = report.to_dict()

        for file_data in data["files"]:
            file_data["findings"] = [f for f in file_data["findings"] if self._keep(f)]

        return json.dumps(data, indent=self.indent, default=str)

    def format_finding(self, finding: Finding) -> str:
        """Format a single finding as JSON."""
        return json.dumps(finding.to_dict(), indent=self.indent, default=str)

    def format_findings(self, findings: List[Finding]) -> str:
        """Format a list of findings as JSON."""
        data = [f.to_dict() for f in findings]
        data = [f for f in data if self._keep(f)]
        return json.dumps(data, indent=self.indent, default=str)
