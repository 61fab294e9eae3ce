"""
Scanner: applies a language's rule catalog to a text buffer.

The scanner is a pure function of ``(text, language)``. It keeps no
state between calls, so the same input always yields the same findings
in the same order.
"""

import json
import logging
from typing import Iterable, List, Optional, Set, Tuple

from errorfinder.core.findings import Finding, Severity
from errorfinder.rules import rules_for
from errorfinder.rules.json_rules import mask_strings
from errorfinder.utils import column_number, line_number, truncate_string


logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 50

STRUCTURE_RULE_ID = "JSON-SYNTAX"


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def check_json_structure(text: str) -> Optional[Finding]:
    """
    Parse ``text`` as a strict JSON document.

    Returns a single line-1 error finding carrying the parser's message
    when the document does not parse, otherwise ``None``.
    """
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.debug("JSON structural check failed: %s", exc)
        return Finding(
            rule_id=STRUCTURE_RULE_ID,
            line=1,
            severity=Severity.ERROR,
            message=f"JSON syntax error: {exc}",
            snippet=truncate_string(text.lstrip(), SNIPPET_LENGTH),
            fixable=False,
            language="json",
        )
    return None


def scan(
    text: str,
    language: str,
    *,
    disabled: Optional[Iterable[str]] = None,
    check_structure: bool = True,
) -> List[Finding]:
    """
    Scan ``text`` with the rule catalog for ``language``.

    Findings are ordered by line; findings on the same line keep the
    order their rules are declared in. At most one finding is reported
    per ``(line, message)``. Empty text or an unknown language yields an
    empty list.

    With ``check_structure`` (the default) a JSON document that does not
    parse produces a single syntax-error finding and no pattern rules
    run. Pass ``check_structure=False`` to run the pattern rules anyway,
    which is what repairing a broken document needs.
    """
    language = language.lower()
    if not text:
        return []

    rules = rules_for(language, disabled)
    if not rules:
        return []

    if language == "json" and check_structure:
        structure_error = check_json_structure(text)
        if structure_error is not None:
            return [structure_error]

    # String values are opaque to the JSON pattern rules
    searched = mask_strings(text) if language == "json" else text

    findings: List[Finding] = []
    seen: Set[Tuple[int, str]] = set()

    for rule in rules:
        for match in rule.pattern.finditer(searched):
            line = line_number(text, match.start())
            key = (line, rule.message)
            if key in seen:
                continue
            seen.add(key)

            findings.append(Finding(
                rule_id=rule.rule_id,
                line=line,
                severity=rule.severity,
                message=rule.message,
                snippet=truncate_string(text[match.start():match.end()].strip(), SNIPPET_LENGTH),
                fixable=rule.fixable,
                column=column_number(text, match.start()),
                language=language,
                fix_description=rule.fix_description,
            ))

    # sort() is stable, so catalog order survives within a line
    findings.sort(key=lambda f: f.line)
    return findings
