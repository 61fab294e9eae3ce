"""
Python rules.

Mostly Python 2 leftovers and comparison idioms. Comparisons against
``True`` are rewritten by dropping the comparison so the fixed line stays
valid; comparisons against ``False`` would need the condition inverted,
so they are only reported.
"""

import re
from typing import Tuple

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


def _split_comment(code: str) -> Tuple[str, str]:
    """Split ``code`` at the first ``#`` that is not inside a string literal."""
    quote = None
    escaped = False
    for index, char in enumerate(code):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "#":
            return code[:index], code[index:]
    return code, ""


def _print_call(match: "re.Match") -> str:
    indent, body = match.group(1), match.group(2)
    body, comment = _split_comment(body)
    body = body.rstrip()

    # Python 2 used a trailing comma to suppress the newline
    end = ""
    if body.endswith(","):
        body = body[:-1].rstrip()
        end = ', end=" "'

    call = f"{indent}print({body}{end})"
    if comment:
        call = f"{call}  {comment}"
    return call


def _expand_indent(line: str) -> str:
    body = line.lstrip(" \t")
    indent = line[:len(line) - len(body)]
    return indent.expandtabs(4) + body


rule = rule_factory("python", "PY")

PYTHON_RULES = register_catalog("python", [
    rule(
        1, "print-statement",
        r"^([ \t]*)print[ \t]+(?![(=\[.,:;)>#])(\S.*?)[ \t]*(?=\r?$)",
        Severity.ERROR,
        "Python 2 print statement - use print() function",
        replacement=_print_call,
        flags=re.MULTILINE,
        fix_description="Convert to print() call",
    ),
    rule(
        2, "tab-indentation",
        r"^[ ]*\t[ \t]*",
        Severity.WARNING,
        "Tab indentation found - use 4 spaces",
        rewrite=_expand_indent,
        flags=re.MULTILINE,
        fix_description="Replace tabs with 4 spaces",
    ),
    rule(
        3, "bare-except",
        r"^([ \t]*)except[ \t]*:",
        Severity.WARNING,
        "Bare except clause - catch specific exceptions",
        replacement=r"\1except Exception:",
        flags=re.MULTILINE,
        fix_description="Replace with except Exception:",
    ),
    rule(
        4, "wildcard-import",
        r"^[ \t]*from[ \t]+[\w.]+[ \t]+import[ \t]+\*",
        Severity.WARNING,
        "Wildcard import - import specific names instead",
        flags=re.MULTILINE,
    ),
    rule(
        5, "eq-none",
        r"[ \t]*==[ \t]*None\b",
        Severity.WARNING,
        'Use "is None" instead of "== None"',
        replacement=" is None",
        fix_description='Replace "== None" with "is None"',
    ),
    rule(
        6, "ne-none",
        r"[ \t]*!=[ \t]*None\b",
        Severity.WARNING,
        'Use "is not None" instead of "!= None"',
        replacement=" is not None",
        fix_description='Replace "!= None" with "is not None"',
    ),
    rule(
        7, "eq-true",
        r"[ \t]*==[ \t]*True\b",
        Severity.WARNING,
        'Comparison to True is redundant - use "if x:"',
        replacement="",
        fix_description="Drop the comparison to True",
    ),
    rule(
        8, "eq-false",
        r"==[ \t]*False\b",
        Severity.WARNING,
        'Comparison to False - use "if not x:"',
    ),
    rule(
        9, "eval-exec",
        r"(?<![\w.])(?:eval|exec)[ \t]*\(",
        Severity.ERROR,
        "eval()/exec() can execute arbitrary code",
    ),
    rule(
        10, "mutable-default",
        r"\bdef[ \t]+\w+[ \t]*\([^)\n]*=[ \t]*(?:\[\]|\{\})",
        Severity.WARNING,
        "Mutable default argument - use None and create the value inside",
    ),
    rule(
        11, "todo-comment",
        r"#[ \t]*TODO\b",
        Severity.INFO,
        "TODO comment found",
        flags=re.IGNORECASE,
    ),
    rule(
        12, "fixme-comment",
        r"#[ \t]*FIXME\b",
        Severity.WARNING,
        "FIXME comment found - needs attention",
        flags=re.IGNORECASE,
    ),
    trailing_whitespace(rule, 13),
])
