"""
Tests for the command-line interface.
"""

import io
import json

import pytest
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errorfinder.cli import main, create_parser
from errorfinder.core.rules import registry
from errorfinder.remediation.writer import WriteResult, write_corrections


@pytest.fixture
def project(tmp_path):
    (tmp_path / "app.js").write_text("var x = 1;\nif (x == 1) { go(); }\n")
    (tmp_path / "style.css").write_text("a { color: red;; }\n")
    return tmp_path


class TestParser:
    """Tests for argument parsing."""

    def test_scan_defaults(self):
        args = create_parser().parse_args(["scan"])
        assert args.target == "."
        assert args.format is None
        assert args.jobs is None

    def test_check_options(self):
        args = create_parser().parse_args(["check", "-", "-l", "json", "--fix", "--lenient"])
        assert args.file == "-"
        assert args.language == "json"
        assert args.fix and args.lenient

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestCheck:
    """Tests for the check command."""

    def test_clean_file(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        path.write_text("let x = 1;\n")

        assert main(["check", str(path), "--no-color"]) == 0
        assert "No issues found!" in capsys.readouterr().out

    def test_warnings_only(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        path.write_text("var x = 1;\n")

        assert main(["check", str(path), "--no-color"]) == 0
        assert "JS-001" in capsys.readouterr().out

    def test_errors_fail(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        path.write_text("debugger;\n")

        assert main(["check", str(path), "--no-color"]) == 1
        assert "JS-005" in capsys.readouterr().out

    def test_json_format(self, tmp_path, capsys):
        path = tmp_path / "query.sql"
        path.write_text("SELECT * FROM users;\n")

        assert main(["check", str(path), "-f", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [f["rule_id"] for f in data] == ["SQL-001"]

    def test_fix_prints_corrected_text(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        path.write_text("var x = 1;\n")

        assert main(["check", str(path), "--fix"]) == 0
        assert capsys.readouterr().out == "let x = 1;\n"
        # The file itself is not touched
        assert path.read_text() == "var x = 1;\n"

    def test_stdin_lenient_repair(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO('{"a": 1,}'))

        assert main(["check", "-", "-l", "json", "--fix", "--lenient"]) == 0
        assert capsys.readouterr().out == '{"a": 1}'

    def test_stdin_strict_json_reports_syntax(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO('{"a": 1,}'))

        assert main(["check", "-", "-l", "json", "--no-color"]) == 1
        assert "JSON-SYNTAX" in capsys.readouterr().out

    def test_disable(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        path.write_text("debugger;\n")

        assert main(["check", str(path), "--disable", "JS-005"]) == 0

    def test_unknown_language(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO("x"))

        assert main(["check", "-", "-l", "cobol"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_undetectable_language(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("hello\n")

        assert main(["check", str(path)]) == 1
        assert "--language" in capsys.readouterr().err


class TestScan:
    """Tests for the scan command."""

    def test_scan_text(self, project, capsys):
        assert main(["scan", str(project), "--no-color"]) == 1
        output = capsys.readouterr().out

        assert "Files analyzed:    2" in output
        assert "CSS-003" in output

    def test_scan_clean_project(self, tmp_path, capsys):
        (tmp_path / "app.js").write_text("let x = 1;\n")

        assert main(["scan", str(tmp_path), "--no-color"]) == 0
        assert "No issues found!" in capsys.readouterr().out

    def test_disable_changes_exit_code(self, project):
        assert main(["scan", str(project), "--disable", "CSS-003"]) == 0

    def test_json_output_file(self, project, tmp_path, capsys):
        out = tmp_path / "report.json"

        assert main(["scan", str(project), "-f", "json", "-o", str(out)]) == 1
        data = json.loads(out.read_text())
        assert data["stats"]["total_files"] == 2
        assert data["stats"]["fixable"] == 3

    def test_sarif_to_stdout(self, project, capsys):
        main(["scan", str(project), "-f", "sarif", "-s", "error"])
        sarif = json.loads(capsys.readouterr().out)

        assert [r["ruleId"] for r in sarif["runs"][0]["results"]] == ["CSS-003"]

    def test_config_file(self, project, capsys):
        (project / ".errorfinder.yaml").write_text("rules:\n  disabled: [CSS-003]\n")
        assert main(["scan", str(project)]) == 0

    def test_missing_target(self, tmp_path, capsys):
        assert main(["scan", str(tmp_path / "missing")]) == 1
        assert "Target not found" in capsys.readouterr().err

    def test_bad_jobs(self, project, capsys):
        assert main(["scan", str(project), "-j", "0"]) == 1
        assert "max_workers" in capsys.readouterr().err


class TestFix:
    """Tests for the fix command."""

    def test_fix_with_backup(self, project, capsys):
        assert main(["fix", str(project)]) == 0

        assert (project / "app.js").read_text() == "let x = 1;\nif (x === 1) { go(); }\n"
        assert (project / "app.js.bak").read_text() == "var x = 1;\nif (x == 1) { go(); }\n"
        assert (project / "style.css").read_text() == "a { color: red; }\n"

        output = capsys.readouterr().out
        assert "FIX REPORT" in output
        assert "Fixed 2/2 files." in output

    def test_dry_run(self, project, capsys):
        assert main(["fix", str(project), "--dry-run"]) == 0

        assert (project / "app.js").read_text() == "var x = 1;\nif (x == 1) { go(); }\n"
        assert not (project / "app.js.bak").exists()
        output = capsys.readouterr().out
        assert "[DRY RUN]" in output
        assert "+let x = 1;" in output

    def test_no_backup(self, project):
        assert main(["fix", str(project), "--no-backup"]) == 0

        assert (project / "app.js").read_text().startswith("let x")
        assert not (project / "app.js.bak").exists()

    def test_remaining_findings_reported(self, tmp_path, capsys):
        (tmp_path / "app.js").write_text("var x = eval(y);\n")

        assert main(["fix", str(tmp_path), "--no-backup"]) == 0
        assert "Remaining findings: 1 errors" in capsys.readouterr().out

    def test_nothing_to_fix(self, tmp_path, capsys):
        (tmp_path / "app.js").write_text("eval(y);\n")

        assert main(["fix", str(tmp_path)]) == 0
        assert "No fixable findings!" in capsys.readouterr().out

    def test_crlf_kept(self, tmp_path):
        path = tmp_path / "app.js"
        path.write_bytes(b"var x = 1;\r\n")

        assert main(["fix", str(tmp_path), "--no-backup"]) == 0
        assert path.read_bytes() == b"let x = 1;\r\n"

    def test_undecodable_bytes_survive(self, tmp_path, capsys):
        path = tmp_path / "app.js"
        original = b"// caf\xe9\nvar x = 1;\n"
        path.write_bytes(original)

        assert main(["fix", str(tmp_path)]) == 0
        assert path.read_bytes() == b"// caf\xe9\nlet x = 1;\n"
        assert (tmp_path / "app.js.bak").read_bytes() == original
        assert "+let x = 1;" in capsys.readouterr().out

    def test_failed_write_keeps_its_findings(self, project, monkeypatch, capsys):
        """Only files that were written count as fixed in the remaining summary."""
        def css_fails(files, backup=True, dry_run=False):
            files = list(files)
            results = write_corrections(
                [f for f in files if f.path.endswith(".js")], backup=backup, dry_run=dry_run
            )
            results.extend(
                WriteResult(path=f.path, success=False, fixes=f.fixable_count, diff="",
                            error_message="Error modifying file: read-only")
                for f in files if f.path.endswith(".css")
            )
            return results

        monkeypatch.setattr("errorfinder.cli.write_corrections", css_fails)

        assert main(["fix", str(project), "--no-backup"]) == 1
        output = capsys.readouterr().out
        assert "Fixed 1/2 files." in output
        assert "Remaining findings: 1 errors" in output
        assert (project / "style.css").read_text() == "a { color: red;; }\n"


class TestInit:
    """Tests for the init command."""

    def test_init(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert main(["init"]) == 0
        assert (tmp_path / ".errorfinder.yaml").exists()

        assert main(["init"]) == 1
        assert "already exists" in capsys.readouterr().out

        assert main(["init", "--force"]) == 0


class TestListRules:
    """Tests for the list-rules command."""

    def test_all_rules(self, capsys):
        assert main(["list-rules"]) == 0
        assert f"Total: {registry.rule_count} rules" in capsys.readouterr().out

    def test_one_language(self, capsys):
        assert main(["list-rules", "--language", "Python"]) == 0
        output = capsys.readouterr().out

        assert "python (13 rules)" in output
        assert "PY-003" in output
        assert "JS-001" not in output

    def test_unknown_language(self, capsys):
        assert main(["list-rules", "--language", "cobol"]) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
