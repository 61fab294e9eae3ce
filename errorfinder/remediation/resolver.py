"""
Fix resolver: turns a buffer and its findings into one corrected buffer.

Fixes are applied line by line rather than by offset, so no rewrite can
invalidate the position of another. On a line with several fixable
findings the rewrites run in catalog order, each one receiving the
output of the previous; the first receives the original line.
"""

import difflib
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from errorfinder.core.findings import Finding
from errorfinder.core.rules import Rule, registry
from errorfinder.core.scanner import scan


logger = logging.getLogger(__name__)

# Runs of this many blank lines or more are collapsed to a single one
BLANK_RUN_LIMIT = 3


@dataclass
class FixOutcome:
    """Result of resolving the fixes for one buffer."""
    corrected_text: str
    applied: List[Finding] = field(default_factory=list)
    failed: List[Finding] = field(default_factory=list)
    removed_lines: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def _split_eol(line: str) -> Tuple[str, str]:
    if line.endswith("\r"):
        return line[:-1], "\r"
    return line, ""


def _line_rules(findings: Iterable[Finding]) -> List[Rule]:
    rules: Dict[str, Rule] = {}
    for finding in findings:
        rule = registry.get_rule(finding.rule_id)
        if rule is None or rule.rewrite is None:
            raise LookupError(f"No rewrite registered for {finding.rule_id}")
        rules[rule.rule_id] = rule
    return sorted(rules.values(), key=lambda r: registry.catalog_index(r.rule_id))


def _rewrite_line(line: str, rules: List[Rule]) -> Tuple[str, bool]:
    """Chain the rewrites of ``rules`` over ``line``; report removal intent."""
    removes = False
    for rule in rules:
        result = rule.rewrite(line)
        if result is None:
            raise ValueError(f"{rule.rule_id} rewrite produced no result")
        line = result
        removes = removes or rule.removes_line
    return line, removes


def normalize(lines: List[str]) -> List[str]:
    """
    Strip trailing whitespace from every line and collapse runs of blank
    lines. A trailing ``\\r`` is kept as the line's ending.
    """
    result: List[str] = []
    blank_run: List[str] = []

    def flush():
        if len(blank_run) >= BLANK_RUN_LIMIT:
            result.append(blank_run[0])
        else:
            result.extend(blank_run)
        blank_run.clear()

    for line in lines:
        body, eol = _split_eol(line)
        body = body.rstrip()
        if body:
            flush()
            result.append(body + eol)
        else:
            blank_run.append(eol)
    flush()
    return result


def plan_fixes(text: str, findings: Iterable[Finding]) -> FixOutcome:
    """
    Compute the corrected version of ``text`` for ``findings``.

    Non-fixable findings never alter the text. A rewrite that raises or
    returns ``None`` leaves its line exactly as it was; the failure is
    logged and the remaining lines are still fixed. Buffer normalization
    only runs when at least one fix was applied.
    """
    by_line: Dict[int, List[Finding]] = {}
    for finding in findings:
        if finding.fixable:
            by_line.setdefault(finding.line, []).append(finding)

    if not by_line:
        return FixOutcome(corrected_text=text)

    lines = text.split("\n")
    final_newline = len(lines) > 1 and lines[-1] == ""
    if final_newline:
        lines.pop()

    outcome = FixOutcome(corrected_text=text)
    removed = set()

    for number in sorted(by_line):
        line_findings = by_line[number]
        index = number - 1
        if not 0 <= index < len(lines):
            logger.warning("Finding on line %d is outside the buffer", number)
            outcome.failed.extend(line_findings)
            continue

        body, eol = _split_eol(lines[index])
        try:
            rules = _line_rules(line_findings)
            fixed, removes = _rewrite_line(body, rules)
        except Exception as exc:
            logger.warning(
                "Could not fix line %d (%s): %s",
                number, ", ".join(f.rule_id for f in line_findings), exc,
            )
            outcome.failed.extend(line_findings)
            continue

        outcome.applied.extend(line_findings)
        if removes and not fixed.strip():
            removed.add(index)
        else:
            lines[index] = fixed + eol

    if not outcome.applied:
        return outcome

    kept = [line for index, line in enumerate(lines) if index not in removed]
    outcome.removed_lines = len(removed)

    kept = normalize(kept)
    if final_newline:
        kept.append("")
    outcome.corrected_text = "\n".join(kept)
    return outcome


def resolve_fixes(text: str, findings: Iterable[Finding]) -> str:
    """Return ``text`` with every fixable finding applied."""
    return plan_fixes(text, findings).corrected_text


def repair(text: str, language: str, disabled: Optional[Iterable[str]] = None) -> str:
    """
    Fix ``text`` without the structural gate.

    Used for data formats whose pattern rules only run once the document
    parses; repairing is how it gets there.
    """
    findings = scan(text, language, disabled=disabled, check_structure=False)
    return resolve_fixes(text, findings)


def generate_diff(original: str, fixed: str, file_path: str) -> str:
    """Generate a unified diff between original and fixed code."""
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        fixed.splitlines(keepends=True),
        fromfile=f"a/{file_path}",
        tofile=f"b/{file_path}",
    )
    return ''.join(diff)
