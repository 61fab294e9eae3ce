"""
Rule catalog primitives for the error finder.

A rule is a static, language-scoped record: a regular expression, a
severity, a human message and an optional rewrite function. Rules are
declared per language as ordered tables and registered with the global
registry when ``errorfinder.rules`` is imported. The declaration order is
significant: it is the order findings are reported in for a given line
and the order rewrites are chained by the fix resolver.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Union
import re

from errorfinder.core.findings import Severity


Rewrite = Callable[[str], Optional[str]]


class UnknownLanguageError(ValueError):
    """Raised when a catalog is required for a language that has none."""


@dataclass(frozen=True)
class Rule:
    """
    A single detection rule.

    ``rewrite`` receives the full text of one line and returns its
    replacement. When ``removes_line`` is set and the rewrite leaves the
    line blank, the resolver drops the line instead of keeping it empty.
    """
    rule_id: str
    name: str
    language: str
    pattern: re.Pattern
    severity: Severity
    message: str
    rewrite: Optional[Rewrite] = field(default=None, compare=False, repr=False)
    removes_line: bool = False
    fix_description: Optional[str] = None

    @property
    def fixable(self) -> bool:
        return self.rewrite is not None


def pattern_rule(
    language: str,
    rule_id: str,
    name: str,
    pattern: str,
    severity: Severity,
    message: str,
    replacement: Union[str, Callable[[re.Match], str], None] = None,
    rewrite: Optional[Rewrite] = None,
    flags: int = 0,
    removes_line: bool = False,
    fix_description: Optional[str] = None,
) -> Rule:
    """
    Build a rule from a pattern string.

    A ``replacement`` (template or match callback) becomes a rewrite that
    substitutes every match of the rule's own pattern within the line, so
    the text the scanner flagged is exactly the text that gets replaced.
    Pass ``rewrite`` instead for line transformations that are not plain
    substitutions.
    """
    compiled = re.compile(pattern, flags)

    if replacement is not None and rewrite is not None:
        raise ValueError(f"Rule {rule_id} declares both a replacement and a rewrite")

    if replacement is not None:
        def rewrite(line: str, _regex=compiled, _repl=replacement) -> str:
            return _regex.sub(_repl, line)

    return Rule(
        rule_id=rule_id,
        name=name,
        language=language,
        pattern=compiled,
        severity=severity,
        message=message,
        rewrite=rewrite,
        removes_line=removes_line,
        fix_description=fix_description,
    )


class RuleRegistry:
    """
    Registry of per-language rule catalogs.

    Catalogs are registered once at import time and never mutated after;
    lookups hand out copies so callers cannot reorder a catalog.
    """

    _instance: Optional["RuleRegistry"] = None

    def __init__(self):
        self._catalogs: Dict[str, List[Rule]] = {}
        self._rules: Dict[str, Rule] = {}
        self._order: Dict[str, int] = {}

    @classmethod
    def get_instance(cls) -> "RuleRegistry":
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register_catalog(self, language: str, rules: Iterable[Rule]) -> List[Rule]:
        """Register the ordered rule table for a language."""
        language = language.lower()
        if language in self._catalogs:
            raise ValueError(f"A catalog for '{language}' is already registered")

        catalog = list(rules)
        for index, rule in enumerate(catalog):
            if rule.language != language:
                raise ValueError(
                    f"Rule {rule.rule_id} is declared for '{rule.language}', "
                    f"not '{language}'"
                )
            if rule.rule_id in self._rules:
                raise ValueError(f"Duplicate rule id: {rule.rule_id}")
            self._rules[rule.rule_id] = rule
            self._order[rule.rule_id] = index

        self._catalogs[language] = catalog
        return catalog

    def rules_for(self, language: str, disabled: Optional[Iterable[str]] = None) -> List[Rule]:
        """
        Return the ordered rules for a language.

        An unknown language yields an empty list; that means "no findings
        possible", not an error.
        """
        catalog = self._catalogs.get(language.lower(), [])
        if not disabled:
            return list(catalog)
        skip = set(disabled)
        return [r for r in catalog if r.rule_id not in skip]

    def require(self, language: str) -> List[Rule]:
        """Like ``rules_for`` but raise for a language without a catalog."""
        if language.lower() not in self._catalogs:
            known = ", ".join(self.languages)
            raise UnknownLanguageError(f"No rule catalog for '{language}'. Known: {known}")
        return self.rules_for(language)

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get a rule by ID."""
        return self._rules.get(rule_id)

    def catalog_index(self, rule_id: str) -> int:
        """Position of a rule within its language catalog."""
        return self._order[rule_id]

    def all_rules(self) -> List[Rule]:
        rules: List[Rule] = []
        for language in self.languages:
            rules.extend(self._catalogs[language])
        return rules

    @property
    def languages(self) -> List[str]:
        return sorted(self._catalogs)

    @property
    def rule_count(self) -> int:
        """Return the number of registered rules."""
        return len(self._rules)


# Global registry instance
registry = RuleRegistry.get_instance()


def register_catalog(language: str, rules: Iterable[Rule]) -> List[Rule]:
    """Register a language catalog with the global registry."""
    return registry.register_catalog(language, rules)
