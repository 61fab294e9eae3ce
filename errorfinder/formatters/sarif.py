"""
SARIF output formatter for IDE integration.

SARIF (Static Analysis Results Interchange Format) is a standard
format for static analysis tool output, supported by many IDEs
and code review tools.
"""

import json
from datetime import datetime, timezone
from typing import Dict, Any, List

from errorfinder import __version__
from errorfinder.core.engine import ProjectReport
from errorfinder.core.findings import Finding, Severity
from errorfinder.core.rules import registry


SARIF_LEVEL = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "note",
}


class SARIFFormatter:
    """
    Formats analysis reports in SARIF format.

    SARIF is supported by:
    - GitHub Code Scanning
    - VS Code SARIF Viewer
    - Azure DevOps
    """

    SARIF_VERSION = "2.1.0"
    SCHEMA_URI = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    def __init__(self, min_severity: Severity = Severity.INFO):
        self.min_severity = min_severity

    def format_result(self, report: ProjectReport) -> str:
        """Format a complete project report in SARIF format."""
        sarif = {
            "$schema": self.SCHEMA_URI,
            "version": self.SARIF_VERSION,
            "runs": [self._create_run(report)],
        }

        return json.dumps(sarif, indent=2)

    def _create_run(self, report: ProjectReport) -> Dict[str, Any]:
        """Create a SARIF run object."""
        located = [
            (analyzed.path, finding)
            for analyzed in report.files
            for finding in analyzed.findings
            if self.min_severity <= finding.severity
        ]

        return {
            "tool": self._create_tool(self._collect_rules(f for _, f in located)),
            "results": [self._create_result(path, finding) for path, finding in located],
            "invocations": [self._create_invocation(report)],
        }

    def _create_tool(self, rules: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Create a SARIF tool object."""
        return {
            "driver": {
                "name": "ErrorFinder",
                "version": __version__,
                "rules": rules,
            }
        }

    def _collect_rules(self, findings) -> List[Dict[str, Any]]:
        """Collect unique rules from findings."""
        rules_seen = set()
        rules = []

        for finding in findings:
            if finding.rule_id not in rules_seen:
                rules_seen.add(finding.rule_id)
                rules.append(self._create_rule(finding))

        return rules

    def _create_rule(self, finding: Finding) -> Dict[str, Any]:
        """Create a SARIF rule object from a finding."""
        rule = registry.get_rule(finding.rule_id)
        name = rule.name if rule else finding.rule_id

        sarif_rule = {
            "id": finding.rule_id,
            "name": name,
            "shortDescription": {
                "text": finding.message,
            },
            "defaultConfiguration": {
                "level": SARIF_LEVEL[finding.severity],
            },
            "properties": {
                "language": finding.language,
                "fixable": finding.fixable,
            },
        }

        if finding.fix_description:
            sarif_rule["help"] = {
                "text": finding.fix_description,
            }

        return sarif_rule

    def _create_result(self, path: str, finding: Finding) -> Dict[str, Any]:
        """Create a SARIF result object from a finding."""
        result = {
            "ruleId": finding.rule_id,
            "level": SARIF_LEVEL[finding.severity],
            "message": {
                "text": finding.message,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": path.replace("\\", "/"),
                        },
                        "region": {
                            "startLine": finding.line,
                            "startColumn": finding.column,
                        },
                    },
                }
            ],
        }

        if finding.snippet:
            result["locations"][0]["physicalLocation"]["region"]["snippet"] = {
                "text": finding.snippet,
            }

        return result

    def _create_invocation(self, report: ProjectReport) -> Dict[str, Any]:
        """Create a SARIF invocation object."""
        return {
            "executionSuccessful": len(report.errors) == 0 and not report.cancelled,
            "endTimeUtc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "toolExecutionNotifications": [
                {
                    "message": {
                        "text": error,
                    },
                    "level": "error",
                }
                for error in report.errors
            ],
        }
