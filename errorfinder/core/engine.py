"""
Project walker for the error finder.

This module applies the scanner and the fix resolver across a batch of
files: it skips excluded and unrecognized files, reads the rest, scans
them, precomputes their corrected text and folds the results into
project statistics.
"""

import os
import re
import threading
import fnmatch
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    Any, Callable, Dict, Generator, Iterable, List, Mapping, Optional, Tuple, Union
)

from errorfinder.core.findings import AnalyzedFile, ProjectStats
from errorfinder.core.scanner import scan
from errorfinder.remediation.resolver import resolve_fixes
from errorfinder.utils import is_binary_file


logger = logging.getLogger(__name__)


# Language detection by file extension
LANGUAGE_EXTENSIONS: Dict[str, List[str]] = {
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "typescript": [".ts", ".tsx"],
    "html": [".html", ".htm"],
    "css": [".css", ".scss"],
    "json": [".json"],
    "python": [".py"],
    "php": [".php"],
    "sql": [".sql"],
}

# Reverse mapping for quick lookup
EXTENSION_TO_LANGUAGE: Dict[str, str] = {}
for lang, exts in LANGUAGE_EXTENSIONS.items():
    for ext in exts:
        EXTENSION_TO_LANGUAGE[ext] = lang


# Dependency and version-control directories, skipped wherever they appear
SKIP_DIRECTORIES = {
    "node_modules",
    "bower_components",
    "vendor",
    ".git",
    ".svn",
    ".hg",
    "__pycache__",
    ".venv",
    "venv",
}

BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg", ".webp", ".bmp",
    ".pdf", ".zip", ".gz", ".tar", ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".exe", ".dll", ".so",
}

DEFAULT_EXCLUDE_PATTERNS = [
    "*.min.js",
    "*.min.css",
]


def detect_language(file_path: str) -> Optional[str]:
    """Detect the language of a file from its extension."""
    ext = os.path.splitext(file_path)[1].lower()
    return EXTENSION_TO_LANGUAGE.get(ext)


@dataclass
class SourceFile:
    """
    One input to the walker: a path plus either its text or a loader.

    The loader is only called when the file is analyzed, and it may raise.
    """
    path: str
    text: Optional[str] = None
    loader: Optional[Callable[[], str]] = field(default=None, repr=False)

    def read(self) -> str:
        if self.text is not None:
            return self.text
        if self.loader is None:
            raise ValueError(f"No content available for {self.path}")
        return self.loader()

    @classmethod
    def from_path(cls, file_path: str) -> "SourceFile":
        def load() -> str:
            with open(file_path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
                return f.read()

        return cls(path=file_path, loader=load)


FileInput = Union[SourceFile, Mapping[str, Any], Tuple[str, str]]


def _as_source(item: FileInput) -> SourceFile:
    if isinstance(item, SourceFile):
        return item
    if isinstance(item, Mapping):
        return SourceFile(path=item["path"], text=item.get("text"), loader=item.get("loader"))
    path, text = item
    return SourceFile(path=path, text=text)


def analyze_text(
    path: str,
    text: str,
    language: Optional[str] = None,
    disabled: Optional[Iterable[str]] = None,
) -> AnalyzedFile:
    """Scan one buffer and precompute its correction."""
    language = language or detect_language(path) or "unknown"
    findings = scan(text, language, disabled=disabled)
    return AnalyzedFile(
        path=path,
        language=language,
        original_text=text,
        corrected_text=resolve_fixes(text, findings),
        findings=findings,
    )


def apply_fixes(analyzed: AnalyzedFile, disabled: Optional[Iterable[str]] = None) -> AnalyzedFile:
    """
    Commit a file's corrected text as its new original.

    Returns a new record whose findings and correction are recomputed from
    the committed text; the input record is left untouched.
    """
    return analyze_text(analyzed.path, analyzed.corrected_text, analyzed.language, disabled)


@dataclass
class ProjectReport:
    """Result of analyzing one batch of files."""
    files: List[AnalyzedFile] = field(default_factory=list)
    stats: ProjectStats = field(default_factory=ProjectStats)
    errors: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    cancelled: bool = False
    disabled_rules: List[str] = field(default_factory=list, repr=False)

    def get(self, path: str) -> Optional[AnalyzedFile]:
        for analyzed in self.files:
            if analyzed.path == path:
                return analyzed
        return None

    def apply_fixes(self, path: Optional[str] = None) -> List[AnalyzedFile]:
        """
        Apply fixes to one file, or to every file when ``path`` is None.

        Statistics are recomputed once after all files are updated.
        Returns the updated records.
        """
        if path is not None and self.get(path) is None:
            raise KeyError(f"File not in report: {path}")

        updated = []
        for index, analyzed in enumerate(self.files):
            if path is not None and analyzed.path != path:
                continue
            self.files[index] = apply_fixes(analyzed, self.disabled_rules)
            updated.append(self.files[index])

        self.stats = ProjectStats.from_files(self.files)
        return updated

    @property
    def has_errors(self) -> bool:
        return self.stats.errors > 0

    def to_dict(self, include_text: bool = False) -> Dict[str, Any]:
        return {
            "files": [f.to_dict(include_text=include_text) for f in self.files],
            "stats": self.stats.to_dict(),
            "errors": self.errors,
            "skipped": self.skipped,
            "cancelled": self.cancelled,
        }


class ProjectWalker:
    """
    Applies the scanner and the fix resolver across a batch of files.

    Each file is analyzed independently; with ``max_workers`` above one
    the files are spread over a thread pool. Results always come back in
    input order, and a file that cannot be read is reported in
    ``ProjectReport.errors`` without affecting the others.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        self.max_file_size = self.config.get("max_file_size", 10 * 1024 * 1024)  # 10MB
        self.max_workers = self.config.get("max_workers", 4)
        self.exclude_patterns = DEFAULT_EXCLUDE_PATTERNS + list(self.config.get("exclude_patterns", []))
        self.disabled_rules = list(self.config.get("disabled_rules", []))

    def detect_language(self, file_path: str) -> Optional[str]:
        return detect_language(file_path)

    def should_skip(self, file_path: str, base_path: Optional[str] = None) -> bool:
        """
        Check whether a file is never analyzed.

        Skipped are files inside dependency or version-control
        directories, binary assets, files matching an exclude pattern and
        files whose extension maps to no language.
        """
        rel_path = os.path.relpath(file_path, base_path) if base_path else file_path
        parts = [p for p in re.split(r"[\\/]+", rel_path) if p]

        if any(part in SKIP_DIRECTORIES for part in parts[:-1]):
            return True

        if os.path.splitext(file_path)[1].lower() in BINARY_EXTENSIONS:
            return True

        if self._excluded(rel_path):
            return True

        return self.detect_language(file_path) is None

    def _excluded(self, rel_path: str) -> bool:
        name = os.path.basename(rel_path)
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
                return True
        return False

    def discover_files(self, target_path: str) -> Generator[SourceFile, None, None]:
        """Discover the files to analyze under ``target_path``."""
        target = Path(target_path)

        if target.is_file():
            yield SourceFile.from_path(str(target))
            return

        for root, dirs, files in os.walk(target):
            # Prune skipped directories before descending
            dirs[:] = sorted(
                d for d in dirs
                if d not in SKIP_DIRECTORIES
                and not self._excluded(os.path.relpath(os.path.join(root, d), target_path))
            )

            for file in sorted(files):
                file_path = os.path.join(root, file)

                if self.should_skip(file_path, target_path):
                    continue

                try:
                    if os.path.getsize(file_path) > self.max_file_size:
                        logger.debug("Skipping %s: larger than %d bytes", file_path, self.max_file_size)
                        continue
                except OSError:
                    continue

                if is_binary_file(file_path):
                    logger.debug("Skipping %s: binary content", file_path)
                    continue

                yield SourceFile.from_path(file_path)

    def _process(self, source: SourceFile) -> Tuple[Optional[AnalyzedFile], Optional[str]]:
        try:
            text = source.read()
        except Exception as e:
            logger.warning("Could not read %s: %s", source.path, e)
            return None, f"Error reading {source.path}: {e}"

        analyzed = analyze_text(
            source.path, text, self.detect_language(source.path), self.disabled_rules
        )
        return analyzed, None

    def analyze_project(
        self,
        files: Iterable[FileInput],
        cancel: Optional[threading.Event] = None,
        base_path: Optional[str] = None,
    ) -> ProjectReport:
        """
        Analyze a batch of files.

        ``files`` may hold ``SourceFile`` objects, ``{"path", "text"}``
        mappings or ``(path, text)`` pairs. Exclude patterns match paths
        relative to ``base_path`` when one is given.

        When ``cancel`` is set during the run, files that have not started
        yet are left out and the report is marked cancelled; files already
        finished stay valid.
        """
        report = ProjectReport(disabled_rules=self.disabled_rules)
        candidates: List[SourceFile] = []

        for item in files:
            source = _as_source(item)
            if self.should_skip(source.path, base_path):
                logger.debug("Skipping %s", source.path)
                report.skipped.append(source.path)
                continue
            candidates.append(source)

        def work(source: SourceFile) -> Optional[Tuple[Optional[AnalyzedFile], Optional[str]]]:
            if cancel is not None and cancel.is_set():
                return None
            return self._process(source)

        if len(candidates) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(work, source) for source in candidates]
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [work(source) for source in candidates]

        for outcome in outcomes:
            if outcome is None:
                report.cancelled = True
                continue
            analyzed, error = outcome
            if error is not None:
                report.errors.append(error)
            else:
                report.files.append(analyzed)

        if report.cancelled:
            logger.info("Analysis cancelled after %d files", len(report.files))

        report.stats = ProjectStats.from_files(report.files)
        return report

    def analyze_path(self, target_path: str, cancel: Optional[threading.Event] = None) -> ProjectReport:
        """Discover and analyze every file under ``target_path``."""
        return self.analyze_project(self.discover_files(target_path), cancel, target_path)


def analyze_project(
    files: Iterable[FileInput],
    cancel: Optional[threading.Event] = None,
    **config,
) -> ProjectReport:
    """
    Analyze a batch of files with a one-off walker.

    Args:
        files: The files to analyze.
        cancel: Optional event that stops the batch early.
        **config: Walker options (``max_workers``, ``exclude_patterns``,
            ``disabled_rules``, ``max_file_size``).

    Returns:
        ProjectReport with the analyzed files and their statistics.
    """
    return ProjectWalker(config).analyze_project(files, cancel)
