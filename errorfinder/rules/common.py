"""
Rules shared by every catalog.
"""

import re
from typing import Callable

from errorfinder.core.findings import Severity
from errorfinder.core.rules import Rule, pattern_rule


def rule_factory(language: str, prefix: str) -> Callable[..., Rule]:
    """
    Return a ``pattern_rule`` builder bound to one language.

    Rule ids are ``<prefix>-<number>``, e.g. ``JS-001``.
    """
    def build(number: int, name: str, pattern: str, severity: Severity, message: str, **kwargs) -> Rule:
        return pattern_rule(language, f"{prefix}-{number:03d}", name, pattern, severity, message, **kwargs)

    return build


def trailing_whitespace(build: Callable[..., Rule], number: int) -> Rule:
    # \r? keeps CRLF buffers from hiding the whitespace before the line break
    return build(
        number,
        "trailing-whitespace",
        r"[ \t]+(?=\r?$)",
        Severity.INFO,
        "Trailing whitespace found",
        replacement="",
        flags=re.MULTILINE,
        fix_description="Remove trailing whitespace",
    )


def insert_attribute(attribute: str):
    """Replacement callback that adds an attribute before a tag's closing bracket."""
    def insert(match: "re.Match") -> str:
        tag = match.group(0)
        if tag.endswith("/>"):
            return f"{tag[:-2].rstrip()} {attribute} />"
        return f"{tag[:-1].rstrip()} {attribute}>"

    return insert


