"""
Tests for the project walker.
"""

import threading

import pytest
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errorfinder.core.engine import (
    ProjectWalker, SourceFile, analyze_project, analyze_text, apply_fixes, detect_language
)
from errorfinder.core.findings import ProjectStats, Severity


@pytest.fixture
def walker():
    return ProjectWalker({"max_workers": 1})


def failing_loader(message):
    def load():
        raise OSError(message)
    return load


class TestLanguageDetection:
    """Tests for extension based language detection."""

    @pytest.mark.parametrize("path,language", [
        ("app.js", "javascript"),
        ("component.JSX", "javascript"),
        ("types.ts", "typescript"),
        ("index.html", "html"),
        ("site.css", "css"),
        ("package.json", "json"),
        ("tool.py", "python"),
        ("index.php", "php"),
        ("schema.sql", "sql"),
        ("README.md", None),
        ("Makefile", None),
    ])
    def test_detect_language(self, path, language):
        assert detect_language(path) == language


class TestSkipping:
    """Tests for files the walker never analyzes."""

    @pytest.mark.parametrize("path", [
        "node_modules/lib/index.js",
        "src/vendor/jquery.js",
        ".git/hooks/pre-commit.py",
        "assets/logo.png",
        "dist/app.min.js",
        "notes.xyz",
        "README.md",
    ])
    def test_skipped(self, walker, path):
        assert walker.should_skip(path)

    @pytest.mark.parametrize("path", ["src/app.js", "vendor.js", "styles/site.css"])
    def test_not_skipped(self, walker, path):
        assert not walker.should_skip(path)

    def test_skip_directories_are_relative_to_base(self, walker):
        path = os.path.join("home", "vendor", "project", "app.js")
        assert not walker.should_skip(path, base_path=os.path.join("home", "vendor"))

    def test_configured_exclude_patterns(self):
        walker = ProjectWalker({"exclude_patterns": ["generated/*", "*.spec.js"]})
        assert walker.should_skip("generated/api.js")
        assert walker.should_skip("src/app.spec.js")
        assert not walker.should_skip("src/app.js")


class TestAnalyzeProject:
    """Tests for batch analysis."""

    def test_unknown_extension_skipped(self):
        """Two recognized files are analyzed and the third is reported as skipped."""
        report = analyze_project([
            ("a.js", "var x = 1;\n"),
            ("b.css", "a { color: red !important; }\n"),
            ("c.xyz", "whatever"),
        ])

        assert [f.path for f in report.files] == ["a.js", "b.css"]
        assert report.skipped == ["c.xyz"]
        assert report.stats.total_files == 2
        assert report.stats.warnings == 2
        assert report.stats.languages == {"css": 1, "javascript": 1}

    @pytest.mark.parametrize("workers", [1, 4])
    def test_input_order_preserved(self, workers):
        files = [(f"file{i:02d}.js", "var x = 1;\n" * (30 - i)) for i in range(30)]
        report = analyze_project(files, max_workers=workers)

        assert [f.path for f in report.files] == [path for path, _ in files]
        assert [len(f.findings) for f in report.files] == [30 - i for i in range(30)]

    def test_mapping_and_source_inputs(self):
        report = analyze_project([
            {"path": "a.py", "text": "print 'x'\n"},
            SourceFile("b.py", loader=lambda: "x = 1\n"),
        ])

        assert [f.path for f in report.files] == ["a.py", "b.py"]
        assert [f.rule_id for f in report.files[0].findings] == ["PY-001"]
        assert report.files[1].findings == []

    def test_corrected_text_precomputed(self):
        report = analyze_project([("a.js", "var x = 1;\n")])
        analyzed = report.get("a.js")

        assert analyzed.corrected_text == "let x = 1;\n"
        assert analyzed.has_changes
        assert report.get("missing.js") is None

    def test_disabled_rules(self):
        report = analyze_project([("a.js", "var x = 1;\n")], disabled_rules=["JS-001"])
        assert report.files[0].findings == []
        assert not report.files[0].has_changes

    @pytest.mark.parametrize("workers", [1, 4])
    def test_partial_read_failure(self, workers):
        report = analyze_project([
            ("a.js", "var x = 1;\n"),
            SourceFile("b.js", loader=failing_loader("permission denied")),
            ("c.js", "debugger;\n"),
        ], max_workers=workers)

        assert [f.path for f in report.files] == ["a.js", "c.js"]
        assert len(report.errors) == 1
        assert "b.js" in report.errors[0]
        assert "permission denied" in report.errors[0]
        assert report.stats.total_files == 2
        assert not report.cancelled

    def test_empty_batch(self):
        report = analyze_project([])
        assert report.files == []
        assert report.stats.total_files == 0
        assert not report.has_errors

    def test_has_errors(self):
        assert analyze_project([("a.js", "debugger;\n")]).has_errors
        assert not analyze_project([("a.js", "var x = 1;\n")]).has_errors

    def test_to_dict(self):
        report = analyze_project([("a.js", "var x = 1;\n"), ("b.txt", "")])
        data = report.to_dict()

        assert data["skipped"] == ["b.txt"]
        assert data["stats"]["total_files"] == 1
        assert data["files"][0]["findings"][0]["rule_id"] == "JS-001"
        assert "corrected_text" not in data["files"][0]
        assert report.to_dict(include_text=True)["files"][0]["corrected_text"] == "let x = 1;\n"


class TestCancellation:
    """Tests for stopping a batch early."""

    @pytest.mark.parametrize("workers", [1, 4])
    def test_cancelled_before_start(self, workers):
        cancel = threading.Event()
        cancel.set()
        report = analyze_project(
            [("a.js", "var x = 1;\n"), ("b.js", "var y = 2;\n")],
            cancel=cancel, max_workers=workers,
        )

        assert report.cancelled
        assert report.files == []
        assert report.stats.total_files == 0

    def test_cancelled_mid_run(self):
        cancel = threading.Event()

        def load_and_cancel():
            cancel.set()
            return "var y = 2;\n"

        report = analyze_project([
            ("a.js", "var x = 1;\n"),
            SourceFile("b.js", loader=load_and_cancel),
            ("c.js", "var z = 3;\n"),
        ], cancel=cancel, max_workers=1)

        # Files already finished stay in the report
        assert [f.path for f in report.files] == ["a.js", "b.js"]
        assert report.cancelled
        assert report.stats.total_files == 2


class TestApplyFixes:
    """Tests for committing corrected text."""

    def test_apply_fixes_is_idempotent(self):
        analyzed = analyze_text("a.js", "var x = 1;\nif (x == 1) { console.log(x); }\n")
        once = apply_fixes(analyzed)
        twice = apply_fixes(once)

        assert once.original_text == analyzed.corrected_text
        assert twice.original_text == once.original_text
        assert not [f for f in once.findings if f.fixable]
        assert not once.has_changes
        # The input record is left untouched
        assert analyzed.original_text.startswith("var x")

    def test_apply_fixes_keeps_flag_only_findings(self):
        once = apply_fixes(analyze_text("a.js", "var x = eval(y);\n"))
        assert [f.rule_id for f in once.findings] == ["JS-006"]
        assert once.original_text == "let x = eval(y);\n"

    def test_report_apply_fixes_to_one_file(self):
        report = analyze_project([("a.js", "var x = 1;\n"), ("b.js", "var y = 2;\n")])
        updated = report.apply_fixes("a.js")

        assert [f.path for f in updated] == ["a.js"]
        assert report.get("a.js").findings == []
        assert report.get("b.js").original_text == "var y = 2;\n"
        assert report.stats.warnings == 1

    def test_report_apply_fixes_to_all_files(self, monkeypatch):
        report = analyze_project([
            ("a.js", "var x = 1;\n"),
            ("b.py", "if x == None:\n    pass\n"),
            ("c.sql", "DROP TABLE users;\n"),
        ])

        calls = []
        original = ProjectStats.from_files

        def counting(cls, files):
            calls.append(1)
            return original(files)

        monkeypatch.setattr(ProjectStats, "from_files", classmethod(counting))
        updated = report.apply_fixes()

        assert len(updated) == 3
        assert len(calls) == 1
        assert report.stats.fixable == 0
        assert report.stats.total_findings == 1
        assert report.get("c.sql").findings[0].severity == Severity.ERROR

    def test_report_apply_fixes_unknown_path(self):
        report = analyze_project([("a.js", "var x = 1;\n")])
        with pytest.raises(KeyError):
            report.apply_fixes("missing.js")


class TestDiscovery:
    """Tests for finding files on disk."""

    def _write(self, path, content, mode="w"):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, mode) as f:
            f.write(content)

    def test_discover_files(self, tmp_path):
        self._write(tmp_path / "src" / "app.js", "var x = 1;\n")
        self._write(tmp_path / "src" / "style.css", "a {}\n")
        self._write(tmp_path / "node_modules" / "lib" / "index.js", "var y;\n")
        self._write(tmp_path / "logo.png", b"\x89PNG", mode="wb")
        self._write(tmp_path / "README.md", "# readme\n")
        self._write(tmp_path / "blob.js", b"var\x00\x01\x02", mode="wb")
        self._write(tmp_path / "big.js", "x" * 200)

        walker = ProjectWalker({"max_file_size": 100})
        found = sorted(os.path.relpath(s.path, tmp_path) for s in walker.discover_files(str(tmp_path)))

        assert found == [os.path.join("src", "app.js"), os.path.join("src", "style.css")]

    def test_discover_single_file(self, tmp_path):
        self._write(tmp_path / "app.js", "var x = 1;\n")
        sources = list(ProjectWalker().discover_files(str(tmp_path / "app.js")))
        assert [s.path for s in sources] == [str(tmp_path / "app.js")]

    def test_analyze_path(self, tmp_path):
        self._write(tmp_path / "a.js", "var x = 1;\r\n")
        self._write(tmp_path / "b.py", "print 'hi'\n")

        report = ProjectWalker().analyze_path(str(tmp_path))

        assert report.stats.total_files == 2
        assert report.errors == []
        # Line endings are read untranslated
        assert report.files[0].corrected_text == "let x = 1;\r\n"

    def test_undecodable_bytes_are_kept(self, tmp_path):
        self._write(tmp_path / "a.js", b"var s = '\xff';\n", mode="wb")

        analyzed = ProjectWalker().analyze_path(str(tmp_path)).files[0]

        assert analyzed.corrected_text.encode("utf-8", "surrogateescape") == b"let s = '\xff';\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
