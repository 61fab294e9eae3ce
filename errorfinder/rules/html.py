"""
HTML rules: accessibility, deprecated markup and inline code.
"""

import re

from errorfinder.core.findings import Severity
from errorfinder.core.rules import register_catalog
from errorfinder.rules.common import insert_attribute, rule_factory, trailing_whitespace


rule = rule_factory("html", "HTML")

HTML_RULES = register_catalog("html", [
    rule(
        1, "img-missing-alt",
        r"<img\b(?![^>\n]*\balt[ \t]*=)[^>\n]*>",
        Severity.ERROR,
        "Image missing alt attribute (accessibility)",
        replacement=insert_attribute('alt=""'),
        flags=re.IGNORECASE,
        fix_description='Add an empty alt="" attribute',
    ),
    rule(
        2, "anchor-missing-href",
        r"<a(?=[ \t>])(?![^>\n]*\bhref[ \t]*=)[^>\n]*>",
        Severity.ERROR,
        "Anchor tag missing href attribute",
        replacement=insert_attribute('href="#"'),
        flags=re.IGNORECASE,
        fix_description='Add a placeholder href="#" attribute',
    ),
    rule(
        3, "html-missing-lang",
        r"<html\b(?![^>\n]*\blang[ \t]*=)[^>\n]*>",
        Severity.WARNING,
        "HTML tag missing lang attribute",
        replacement=insert_attribute('lang="en"'),
        flags=re.IGNORECASE,
        fix_description='Add lang="en" to the html tag',
    ),
    rule(
        4, "font-tag",
        r"<font\b",
        Severity.ERROR,
        "<font> tag is deprecated - use CSS instead",
        flags=re.IGNORECASE,
    ),
    rule(
        5, "center-tag",
        r"<center\b",
        Severity.ERROR,
        "<center> tag is deprecated - use CSS instead",
        flags=re.IGNORECASE,
    ),
    rule(
        6, "marquee-tag",
        r"<marquee\b",
        Severity.ERROR,
        "<marquee> tag is deprecated and inaccessible",
        flags=re.IGNORECASE,
    ),
    rule(
        7, "br-not-self-closing",
        r"<br[ \t]*>",
        Severity.WARNING,
        "Use self-closing <br /> tag",
        replacement="<br />",
        flags=re.IGNORECASE,
        fix_description="Replace <br> with <br />",
    ),
    rule(
        8, "hr-not-self-closing",
        r"<hr[ \t]*>",
        Severity.WARNING,
        "Use self-closing <hr /> tag",
        replacement="<hr />",
        flags=re.IGNORECASE,
        fix_description="Replace <hr> with <hr />",
    ),
    rule(
        9, "inline-style",
        r"\bstyle[ \t]*=[ \t]*[\"']",
        Severity.WARNING,
        "Inline styles found - consider using CSS classes",
        flags=re.IGNORECASE,
    ),
    rule(
        10, "inline-handler",
        r"<[^>\n]*\bon[a-z]+[ \t]*=[ \t]*[\"']",
        Severity.WARNING,
        "Inline event handler found - use addEventListener instead",
        flags=re.IGNORECASE,
    ),
    rule(
        11, "bold-tag",
        r"<(/?)b>",
        Severity.INFO,
        "Use <strong> instead of <b> for semantic meaning",
        replacement=r"<\1strong>",
        flags=re.IGNORECASE,
        fix_description="Replace <b> with <strong>",
    ),
    rule(
        12, "italic-tag",
        r"<(/?)i>",
        Severity.INFO,
        "Use <em> instead of <i> for semantic meaning",
        replacement=r"<\1em>",
        flags=re.IGNORECASE,
        fix_description="Replace <i> with <em>",
    ),
    rule(
        13, "html-comment",
        r"<!--[\s\S]*?-->",
        Severity.INFO,
        "HTML comment found - remove before production",
    ),
    trailing_whitespace(rule, 14),
])
