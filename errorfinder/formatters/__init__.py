"""
Output formatters for analysis reports.

Provides multiple output formats including:
- Human-readable CLI output
- JSON for machine processing
- SARIF for IDE integration
"""

from errorfinder.formatters.cli import CLIFormatter
from errorfinder.formatters.json_formatter import JSONFormatter
from errorfinder.formatters.sarif import SARIFFormatter

__all__ = [
    "CLIFormatter",
    "JSONFormatter",
    "SARIFFormatter",
    "get_formatter",
]


def get_formatter(format_name: str, **options):
    """Get a formatter by name."""
    formatters = {
        "text": CLIFormatter,
        "cli": CLIFormatter,
        "json": JSONFormatter,
        "sarif": SARIFFormatter,
    }

    formatter_class = formatters.get(format_name.lower())
    if formatter_class:
        return formatter_class(**options)

    raise ValueError(f"Unknown format: {format_name}")
