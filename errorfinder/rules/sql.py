"""
SQL rules. All of them are reported for review; none is rewritten.
"""

import re

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import rule_factory, trailing_whitespace


rule = rule_factory("sql", "SQL")

SQL_RULES = register_catalog("sql", [
    rule(
        1, "select-star",
        r"\bSELECT[ \t]+\*",
        Severity.WARNING,
        "SELECT * fetches every column - list the columns you need",
        flags=re.IGNORECASE,
    ),
    rule(
        2, "hardcoded-password",
        r"\bpassword\b[ \t]*=[ \t]*'[^'\n]+'",
        Severity.ERROR,
        "Hardcoded password found in query",
        flags=re.IGNORECASE,
    ),
    rule(
        3, "delete-without-where",
        r"\bDELETE[ \t]+FROM[ \t]+[\w.\"`\[\]]+[ \t]*(?:;|\r?$)",
        Severity.ERROR,
        "DELETE without WHERE clause removes every row",
        flags=re.IGNORECASE | re.MULTILINE,
    ),
    rule(
        4, "update-without-where",
        r"\bUPDATE[ \t]+[\w.\"`\[\]]+[ \t]+SET\b(?:(?!\bWHERE\b)[^;])*;",
        Severity.ERROR,
        "UPDATE without WHERE clause changes every row",
        flags=re.IGNORECASE,
    ),
    rule(
        5, "drop-table",
        r"\bDROP[ \t]+TABLE\b",
        Severity.ERROR,
        "DROP TABLE found - make sure this is intended",
        flags=re.IGNORECASE,
    ),
    rule(
        6, "truncate",
        r"\bTRUNCATE[ \t]+(?:TABLE[ \t]+)?\w",
        Severity.WARNING,
        "TRUNCATE removes every row without logging",
        flags=re.IGNORECASE,
    ),
    rule(
        7, "leading-wildcard",
        r"\bLIKE[ \t]+'%",
        Severity.INFO,
        "Leading wildcard in LIKE prevents index use",
        flags=re.IGNORECASE,
    ),
    rule(
        8, "order-by-position",
        r"\bORDER[ \t]+BY[ \t]+\d+\b",
        Severity.WARNING,
        "ORDER BY column position is fragile - use column names",
        flags=re.IGNORECASE,
    ),
    trailing_whitespace(rule, 9),
])
