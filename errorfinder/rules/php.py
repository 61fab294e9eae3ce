"""
PHP rules.
"""

import re

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


_SUPERGLOBAL = r"\$_(?:GET|POST|REQUEST|COOKIE|SERVER)"

rule = rule_factory("php", "PHP")

PHP_RULES = register_catalog("php", [
    rule(
        1, "mysql-function",
        r"\bmysql_\w+[ \t]*\(",
        Severity.ERROR,
        "Deprecated mysql_* function - use PDO or mysqli",
    ),
    rule(
        2, "echo-superglobal",
        r"\becho[ \t]+(" + _SUPERGLOBAL + r"\[[^\]\n]*\])",
        Severity.ERROR,
        "Unescaped user input echoed (XSS risk)",
        replacement=r"echo htmlspecialchars(\1, ENT_QUOTES, 'UTF-8')",
        fix_description="Wrap the value in htmlspecialchars()",
    ),
    rule(
        3, "echo-superglobal-expression",
        r"\becho\b(?![ \t]+" + _SUPERGLOBAL + r"\[[^\]\n]*\])"
        r"(?![^;\n]*\b(?:htmlspecialchars|htmlentities|intval)\b)[^;\n]*" + _SUPERGLOBAL,
        Severity.ERROR,
        "User input echoed without escaping (XSS risk)",
    ),
    rule(
        4, "eval",
        r"(?<![\w$>:])eval[ \t]*\(",
        Severity.ERROR,
        "eval() is dangerous - avoid using it",
    ),
    rule(
        5, "error-reporting-off",
        r"\berror_reporting[ \t]*\([ \t]*0[ \t]*\)",
        Severity.WARNING,
        "error_reporting(0) hides errors",
    ),
    rule(
        6, "extract-superglobal",
        r"\bextract[ \t]*\([ \t]*" + _SUPERGLOBAL,
        Severity.ERROR,
        "extract() on user input can overwrite variables",
    ),
    rule(
        7, "short-open-tag",
        r"<\?(?!php\b|=|xml\b)",
        Severity.WARNING,
        "Short open tag found - use <?php",
        flags=re.IGNORECASE,
    ),
    trailing_whitespace(rule, 8),
])
