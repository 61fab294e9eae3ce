"""
Tests for the output formatters.
"""

import json

import pytest
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errorfinder.core.engine import analyze_project
from errorfinder.core.findings import Severity
from errorfinder.core.scanner import scan
from errorfinder.formatters import CLIFormatter, JSONFormatter, SARIFFormatter, get_formatter


@pytest.fixture
def report():
    return analyze_project([
        ("src/app.js", "var x = 1;\ndebugger;\nconsole.log(x);\n"),
        ("page.html", "<p>ok</p>\n"),
    ])


class TestGetFormatter:
    """Tests for formatter lookup."""

    @pytest.mark.parametrize("name,cls", [
        ("text", CLIFormatter),
        ("cli", CLIFormatter),
        ("JSON", JSONFormatter),
        ("sarif", SARIFFormatter),
    ])
    def test_lookup(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_formatter("xml")


class TestCLIFormatter:
    """Tests for human-readable output."""

    def test_format_result(self, report):
        output = CLIFormatter(use_color=False).format_result(report)

        assert "CODE ANALYSIS RESULTS" in output
        assert "Files analyzed:    2" in output
        assert "Auto-fixable:      3" in output
        assert "src/app.js (javascript)" in output
        assert "JS-005" in output
        # Clean files get no detail section
        assert "page.html (html)" not in output

    def test_no_color_has_no_escape_codes(self, report):
        assert "\033[" not in CLIFormatter(use_color=False).format_result(report)

    def test_min_severity(self, report):
        output = CLIFormatter(use_color=False, min_severity=Severity.ERROR).format_result(report)

        assert "JS-005" in output
        assert "JS-001" not in output
        assert "JS-004" not in output

    def test_clean_report(self):
        report = analyze_project([("a.js", "let x = 1;\n")])
        assert "No issues found!" in CLIFormatter(use_color=False).format_result(report)

    def test_empty_report(self):
        report = analyze_project([("notes.txt", "hello")])
        assert "No files were analyzed." in CLIFormatter(use_color=False).format_result(report)

    def test_errors_section(self):
        def fail():
            raise OSError("disk on fire")

        report = analyze_project([{"path": "a.js", "loader": fail}])
        output = CLIFormatter(use_color=False).format_result(report)

        assert "ERRORS" in output
        assert "disk on fire" in output

    def test_verbose_shows_fix(self):
        findings = scan("var x = 1;\n", "javascript")
        output = CLIFormatter(use_color=False, verbose=True).format_findings(findings)

        assert "1:1" in output
        assert "(fixable)" in output
        assert 'Fix: Replace "var" with "let"' in output

    def test_snippets_can_be_hidden(self):
        findings = scan("eval(code);\n", "javascript")

        assert "eval(" in CLIFormatter(use_color=False).format_findings(findings).split("\n")[1]
        assert len(CLIFormatter(use_color=False, show_snippets=False).format_findings(findings).split("\n")) == 1

    def test_no_findings(self):
        assert CLIFormatter(use_color=False).format_findings([]) == "No issues found!"


class TestJSONFormatter:
    """Tests for JSON output."""

    def test_format_result(self, report):
        data = json.loads(JSONFormatter().format_result(report))

        assert data["stats"]["total_files"] == 2
        assert data["stats"]["by_severity"] == {"error": 1, "warning": 1, "info": 1}
        assert [f["rule_id"] for f in data["files"][0]["findings"]] == ["JS-001", "JS-005", "JS-004"]
        assert data["cancelled"] is False

    def test_min_severity(self, report):
        data = json.loads(JSONFormatter(min_severity=Severity.WARNING).format_result(report))
        assert [f["rule_id"] for f in data["files"][0]["findings"]] == ["JS-001", "JS-005"]

    def test_format_findings(self):
        data = json.loads(JSONFormatter().format_findings(scan("var x = 1;\n", "javascript")))

        assert len(data) == 1
        assert data[0]["rule_id"] == "JS-001"
        assert data[0]["severity"] == "warning"

    def test_format_finding(self):
        finding = scan("debugger;\n", "javascript")[0]
        assert json.loads(JSONFormatter().format_finding(finding))["fixable"] is True


class TestSARIFFormatter:
    """Tests for SARIF output."""

    def test_format_result(self, report):
        sarif = json.loads(SARIFFormatter().format_result(report))

        assert sarif["version"] == "2.1.0"
        run = sarif["runs"][0]
        assert run["tool"]["driver"]["name"] == "ErrorFinder"
        assert [r["id"] for r in run["tool"]["driver"]["rules"]] == ["JS-001", "JS-005", "JS-004"]
        assert [r["level"] for r in run["results"]] == ["warning", "error", "note"]
        assert run["invocations"][0]["executionSuccessful"] is True

    def test_result_location(self, report):
        result = json.loads(SARIFFormatter().format_result(report))["runs"][0]["results"][1]
        region = result["locations"][0]["physicalLocation"]["region"]

        assert result["ruleId"] == "JS-005"
        assert result["locations"][0]["physicalLocation"]["artifactLocation"]["uri"] == "src/app.js"
        assert region["startLine"] == 2
        assert region["startColumn"] == 1
        assert region["snippet"]["text"] == "debugger;"

    def test_rule_names_from_catalog(self, report):
        rules = json.loads(SARIFFormatter().format_result(report))["runs"][0]["tool"]["driver"]["rules"]
        assert rules[0]["name"] == "legacy-var"
        assert rules[0]["help"]["text"] == 'Replace "var" with "let"'

    def test_min_severity(self, report):
        run = json.loads(SARIFFormatter(min_severity=Severity.ERROR).format_result(report))["runs"][0]
        assert [r["ruleId"] for r in run["results"]] == ["JS-005"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
