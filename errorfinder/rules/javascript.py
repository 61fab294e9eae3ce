"""
JavaScript and TypeScript rules.

Both catalogs share the same script rules; TypeScript adds checks for
type annotations. Every fixable pattern is confined to a single line so a
rewrite of that line removes exactly what the scanner reported.
"""

import re
from typing import List

from errorfinder.core.findings import Severity
from errorfinder.core.rules import Rule, register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


# Arguments with up to two levels of nested parentheses, on one line
_CALL_ARGS = r"\((?:[^()\n]|\((?:[^()\n]|\([^()\n]*\))*\))*\)"

_CONSOLE_CALL = r"\bconsole\.(?:log|warn|error|info|debug)[ \t]*"

# A statement stands alone at the start of a line or right after ; { or }
_STANDALONE = r"(?:^|(?<=[;{}]))[ \t]*"
_STATEMENT_END = r"[ \t]*(?:;|(?=\}|\r?$))"


def _drop_statements(pattern: str):
    """
    Rewrite that deletes every standalone match of ``pattern`` from a line.

    Indentation is kept and the space left in front of the remaining code
    is dropped, so ``console.log(a); run();`` becomes ``run();``.
    """
    regex = re.compile(pattern)

    def rewrite(line: str) -> str:
        body = line.lstrip()
        indent = line[:len(line) - len(body)]
        return indent + regex.sub("", body).lstrip()

    return rewrite


def script_rules(language: str, prefix: str) -> List[Rule]:
    """Build the shared script-language catalog for ``language``."""
    rule = rule_factory(language, prefix)

    return [
        rule(
            1, "legacy-var",
            r"\bvar[ \t]+(?=[A-Za-z_$\[{])",
            Severity.WARNING,
            'Use "let" or "const" instead of "var"',
            replacement="let ",
            fix_description='Replace "var" with "let"',
        ),
        rule(
            2, "loose-equality",
            r"(?<![=!<>])==(?!=)",
            Severity.WARNING,
            'Use "===" instead of "==" for strict equality',
            replacement="===",
            fix_description='Replace "==" with "==="',
        ),
        rule(
            3, "loose-inequality",
            r"!=(?!=)",
            Severity.WARNING,
            'Use "!==" instead of "!=" for strict inequality',
            replacement="!==",
            fix_description='Replace "!=" with "!=="',
        ),
        rule(
            4, "console-statement",
            _STANDALONE + _CONSOLE_CALL + _CALL_ARGS + _STATEMENT_END,
            Severity.INFO,
            "Console statement found - remove before production",
            rewrite=_drop_statements(_STANDALONE + _CONSOLE_CALL + _CALL_ARGS + _STATEMENT_END),
            flags=re.MULTILINE,
            removes_line=True,
            fix_description="Remove console statements",
        ),
        rule(
            5, "debugger-statement",
            _STANDALONE + r"\bdebugger\b" + _STATEMENT_END,
            Severity.ERROR,
            "Debugger statement found - remove before production",
            rewrite=_drop_statements(_STANDALONE + r"\bdebugger\b" + _STATEMENT_END),
            flags=re.MULTILINE,
            removes_line=True,
            fix_description="Remove debugger statements",
        ),
        rule(
            6, "eval",
            r"(?<![\w.$])eval[ \t]*\(",
            Severity.ERROR,
            "eval() is dangerous - avoid using it",
        ),
        rule(
            7, "document-write",
            r"\bdocument\.write(?:ln)?[ \t]*\(",
            Severity.ERROR,
            "document.write() is deprecated and dangerous",
        ),
        rule(
            8, "alert",
            r"(?<![\w.$])alert[ \t]*\(",
            Severity.WARNING,
            "alert() found - consider using a modal instead",
        ),
        rule(
            9, "array-constructor",
            r"\bnew[ \t]+Array[ \t]*\([ \t]*\)",
            Severity.WARNING,
            "Use [] instead of new Array()",
            replacement="[]",
            fix_description="Replace new Array() with []",
        ),
        rule(
            10, "object-constructor",
            r"\bnew[ \t]+Object[ \t]*\([ \t]*\)",
            Severity.WARNING,
            "Use {} instead of new Object()",
            replacement="{}",
            fix_description="Replace new Object() with {}",
        ),
        rule(
            # Only at the end of a statement line; "for (;;)" stays legal
            11, "double-semicolon",
            r";(?:[ \t]*;)+(?=[ \t]*\r?$)",
            Severity.ERROR,
            "Double semicolon found",
            replacement=";",
            flags=re.MULTILINE,
            fix_description="Remove double semicolons",
        ),
        rule(
            12, "use-strict",
            r"^[ \t]*(['\"])use strict\1[ \t]*;?",
            Severity.INFO,
            '"use strict" is not needed in ES modules',
            replacement="",
            flags=re.MULTILINE,
            removes_line=True,
            fix_description='Remove "use strict"',
        ),
        rule(
            13, "todo-comment",
            r"//[ \t]*TODO\b",
            Severity.INFO,
            "TODO comment found",
            flags=re.IGNORECASE,
        ),
        rule(
            14, "fixme-comment",
            r"//[ \t]*FIXME\b",
            Severity.WARNING,
            "FIXME comment found - needs attention",
            flags=re.IGNORECASE,
        ),
        # Calls that are an if body, an arrow body or part of an expression;
        # deleting them would change what the surrounding code does
        rule(
            16, "console-in-expression",
            r"(?<=[^;{}\s])[ \t]*" + _CONSOLE_CALL + r"\("
            r"|" + _STANDALONE + _CONSOLE_CALL + _CALL_ARGS + r"(?![ \t]*(?:;|\}|\r?$))",
            Severity.INFO,
            "Console call is not a standalone statement - remove it by hand",
            flags=re.MULTILINE,
        ),
        rule(
            17, "debugger-in-expression",
            r"(?<=[^;{}\s])[ \t]*\bdebugger\b"
            r"|" + _STANDALONE + r"\bdebugger\b(?![ \t]*(?:;|\}|\r?$))",
            Severity.ERROR,
            "Debugger is not a standalone statement - remove it by hand",
            flags=re.MULTILINE,
        ),
        trailing_whitespace(rule, 15),
    ]


def typescript_rules() -> List[Rule]:
    rules = script_rules("typescript", "TS")
    rule = rule_factory("typescript", "TS")
    # Trailing whitespace stays the last rule of the catalog
    rules[-1:-1] = [
        rule(
            18, "any-type",
            r":[ \t]*any\b",
            Severity.WARNING,
            "Avoid the 'any' type - use a specific type or 'unknown'",
        ),
        rule(
            19, "non-null-assertion",
            r"[\w)\]]!\.",
            Severity.INFO,
            "Non-null assertion found - prefer an explicit check",
        ),
    ]
    return rules


JAVASCRIPT_RULES = register_catalog("javascript", script_rules("javascript", "JS"))
TYPESCRIPT_RULES = register_catalog("typescript", typescript_rules())
