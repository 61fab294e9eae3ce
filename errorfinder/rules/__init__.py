"""
Built-in rule catalogs.

Importing this package registers every language catalog with the global
registry.
"""

from typing import Iterable, List, Optional

from errorfinder.core.rules import Rule, registry

from errorfinder.rules import css, html, javascript, json_rules, php, python, sql


def rules_for(language: str, disabled: Optional[Iterable[str]] = None) -> List[Rule]:
    """
    Return the ordered rules for ``language``.

    Unknown languages yield an empty list.
    """
    return registry.rules_for(language, disabled)


__all__ = ["registry", "rules_for"]
