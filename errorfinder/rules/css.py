"""
CSS rules.
"""

import re

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


rule = rule_factory("css", "CSS")

CSS_RULES = register_catalog("css", [
    rule(
        1, "important",
        r"!\s*important\b",
        Severity.WARNING,
        "!important found - increases specificity and makes styles harder to override",
        flags=re.IGNORECASE,
    ),
    rule(
        2, "empty-block",
        r"\{\s*\}",
        Severity.WARNING,
        "Empty CSS rule block found",
    ),
    rule(
        3, "double-semicolon",
        r";(?:[ \t]*;)+",
        Severity.ERROR,
        "Double semicolon found",
        replacement=";",
        fix_description="Remove double semicolons",
    ),
    rule(
        4, "universal-selector",
        r"(?:^|(?<=[ \t,>+~}]))\*[ \t]*(?=\{)",
        Severity.WARNING,
        "Universal selector (*) can hurt rendering performance",
        flags=re.MULTILINE,
    ),
    rule(
        5, "import",
        r"@import\b",
        Severity.WARNING,
        "@import blocks parallel downloads - use <link> or bundling",
        flags=re.IGNORECASE,
    ),
    rule(
        6, "high-z-index",
        r"\bz-index[ \t]*:[ \t]*\d{4,}",
        Severity.WARNING,
        "Very high z-index value found",
        flags=re.IGNORECASE,
    ),
    rule(
        7, "vendor-prefix",
        r"(?<![\w-])-(?:webkit|moz|ms|o)-[\w-]+[ \t]*:",
        Severity.INFO,
        "Vendor prefix found - consider using autoprefixer",
    ),
    rule(
        8, "float-layout",
        r"(?<![\w-])float[ \t]*:[ \t]*(?:left|right)\b",
        Severity.INFO,
        "float used for layout - consider flexbox or grid",
        flags=re.IGNORECASE,
    ),
    trailing_whitespace(rule, 9),
])
