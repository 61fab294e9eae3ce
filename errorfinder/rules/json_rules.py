"""
JSON rules.

These only fire on documents that either parse or are being repaired in
lenient mode; a strict scan of an unparseable document stops at the
structural check. Comment rules come first so that a trailing comma
hidden behind a comment is exposed before the comma rewrite runs.

String values are never matched or rewritten: the scanner runs the rules
over ``mask_strings(text)`` and every rewrite skips string spans the same
way, so ``"see //here"`` stays a string and not a comment.
"""

import re
from typing import Callable, Union

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


STRING_PLACEHOLDER = "_"

# Token positions where a value may start
_VALUE_START = r"((?:^|[:\[,])[ \t]*)"


def mask_strings(text: str) -> str:
    """
    Return ``text`` with the contents of every double-quoted string
    replaced by placeholders of the same length.

    Comments and single-quoted strings are skipped over unmasked, so a
    quote inside them never opens a string. A string left open runs to
    the end of its line.
    """
    chars = list(text)
    i = 0
    n = len(text)

    while i < n:
        if text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        elif text[i] in "\"'":
            quote = text[i]
            j = i + 1
            while j < n and text[j] not in (quote, "\n"):
                if text[j] == "\\" and j + 1 < n and text[j + 1] != "\n":
                    j += 1
                j += 1
            if quote == '"':
                for k in range(i + 1, j):
                    chars[k] = STRING_PLACEHOLDER
            i = j + 1 if j < n and text[j] == quote else j
        else:
            i += 1

    return "".join(chars)


def outside_strings(
    pattern: str,
    replacement: Union[str, Callable[["re.Match"], str]],
    flags: int = 0,
) -> Callable[[str], str]:
    """
    Rewrite that substitutes ``pattern`` only outside string values.

    Matches are found on the masked line and replaced in the original.
    No catalog pattern can match a placeholder, so a match never covers
    masked text and its groups read the same in both.
    """
    regex = re.compile(pattern, flags)

    def rewrite(line: str) -> str:
        parts = []
        last = 0
        for match in regex.finditer(mask_strings(line)):
            parts.append(line[last:match.start()])
            if callable(replacement):
                parts.append(replacement(match))
            else:
                parts.append(match.expand(replacement))
            last = match.end()
        parts.append(line[last:])
        return "".join(parts)

    return rewrite


_build = rule_factory("json", "JSON")


def rule(number, name, pattern, severity, message, replacement=None, flags=0, **kwargs):
    if replacement is not None:
        kwargs["rewrite"] = outside_strings(pattern, replacement, flags)
    return _build(number, name, pattern, severity, message, flags=flags, **kwargs)


JSON_RULES = register_catalog("json", [
    rule(
        1, "line-comment",
        r"(?:^|(?<=[ \t,{\[]))//[^\n]*",
        Severity.ERROR,
        "Comments are not allowed in JSON",
        replacement="",
        flags=re.MULTILINE,
        removes_line=True,
        fix_description="Remove the comment",
    ),
    rule(
        2, "block-comment",
        r"/\*[^\n]*?\*/",
        Severity.ERROR,
        "Block comments are not allowed in JSON",
        replacement="",
        removes_line=True,
        fix_description="Remove the comment",
    ),
    rule(
        3, "multiline-comment",
        r"/\*(?:(?!\*/)[^\n])*\n[\s\S]*?\*/",
        Severity.ERROR,
        "Multi-line comments are not allowed in JSON",
    ),
    rule(
        4, "trailing-comma",
        r",(?=[ \t]*[}\]])",
        Severity.ERROR,
        "Trailing comma not allowed in JSON",
        replacement="",
        fix_description="Remove the trailing comma",
    ),
    rule(
        # The closing bracket sits on a later line; the rewrite only sees
        # the line holding the comma.
        5, "trailing-comma-eol",
        r",(?=[ \t]*(?://[^\n]*)?\r?\n(?:[ \t]*//[^\n]*\n)*\s*[}\]])",
        Severity.ERROR,
        "Trailing comma before closing bracket not allowed in JSON",
        rewrite=outside_strings(r",(?=[ \t]*(?://.*)?$)", ""),
        fix_description="Remove the trailing comma",
    ),
    rule(
        6, "single-quotes",
        _VALUE_START + r"'([^'\"\n]*)'",
        Severity.ERROR,
        "JSON requires double quotes, not single quotes",
        replacement=r'\1"\2"',
        flags=re.MULTILINE,
        fix_description="Replace single quotes with double quotes",
    ),
    rule(
        7, "undefined",
        r":[ \t]*undefined\b",
        Severity.ERROR,
        "undefined is not valid in JSON - use null",
        replacement=": null",
        fix_description="Replace undefined with null",
    ),
    rule(
        8, "nan",
        _VALUE_START + r"NaN\b",
        Severity.ERROR,
        "NaN is not valid in JSON - use null",
        replacement=r"\1null",
        flags=re.MULTILINE,
        fix_description="Replace NaN with null",
    ),
    rule(
        9, "infinity",
        _VALUE_START + r"[-+]?Infinity\b",
        Severity.ERROR,
        "Infinity is not valid in JSON - use null",
        replacement=r"\1null",
        flags=re.MULTILINE,
        fix_description="Replace Infinity with null",
    ),
    trailing_whitespace(_build, 10),
])
