"""
Command-line interface for the error finder.

Provides commands to check a single buffer, analyze a project, apply
fixes to disk and inspect the rule catalogs.
"""

import argparse
import logging
import sys
import os
from typing import Optional, List

from errorfinder import __version__
from errorfinder.config import ScanConfig, load_scan_config, create_default_config
from errorfinder.core.engine import ProjectWalker, analyze_text, detect_language
from errorfinder.core.findings import Severity
from errorfinder.core.rules import registry
from errorfinder.formatters import get_formatter
from errorfinder.remediation import format_fix_report, repair, write_corrections


CONFIG_FILE = ".errorfinder.yaml"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="errorfinder",
        description="Rule-based error finder and auto-fixer for source code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  errorfinder check app.js                     # Check a single file
  errorfinder check - -l json --fix --lenient  # Repair JSON from stdin
  errorfinder scan ./src                       # Analyze a directory
  errorfinder scan . --format sarif -o out     # SARIF output to file
  errorfinder fix ./src --dry-run              # Show fixes without applying
  errorfinder init                             # Create config file
  errorfinder list-rules --language python     # Show the Python rules
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a single file or stdin")
    check_parser.add_argument(
        "file",
        help="File to check, or - for stdin",
    )
    check_parser.add_argument(
        "-l", "--language",
        help="Language of the input (default: detected from the file extension)",
    )
    check_parser.add_argument(
        "--fix",
        action="store_true",
        help="Print the corrected text instead of the findings",
    )
    check_parser.add_argument(
        "--lenient",
        action="store_true",
        help="With --fix, repair documents that do not parse yet",
    )
    check_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format for findings (default: text)",
    )
    check_parser.add_argument(
        "--disable",
        action="append",
        metavar="RULE",
        help="Disable a rule by id (can be specified multiple times)",
    )
    check_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    check_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Analyze a project")
    scan_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target file or directory to analyze (default: current directory)",
    )
    scan_parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    scan_parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "sarif"],
        help="Output format (default: text)",
    )
    scan_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    scan_parser.add_argument(
        "-s", "--severity",
        choices=["error", "warning", "info"],
        help="Minimum severity to report (default: info)",
    )
    scan_parser.add_argument(
        "--exclude",
        action="append",
        help="Exclude patterns (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "--disable",
        action="append",
        metavar="RULE",
        help="Disable a rule by id (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 4)",
    )
    scan_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    scan_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    # Fix command
    fix_parser = subparsers.add_parser("fix", help="Apply automatic fixes")
    fix_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target file or directory",
    )
    fix_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show fixes without applying them",
    )
    fix_parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Don't create backup files",
    )
    fix_parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    fix_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    # List-rules command
    rules_parser = subparsers.add_parser("list-rules", help="List available rules")
    rules_parser.add_argument(
        "--language",
        help="Filter by language",
    )

    return parser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> ScanConfig:
    if not os.path.exists(args.target):
        raise FileNotFoundError(f"Target not found: {args.target}")
    return load_scan_config(args.config, start_dir=args.target)


def cmd_check(args: argparse.Namespace) -> int:
    """Execute the check command."""
    if args.file == "-":
        text = sys.stdin.read()
        path = "<stdin>"
    else:
        with open(args.file, "r", encoding="utf-8", newline="") as f:
            text = f.read()
        path = args.file

    language = args.language or detect_language(path)
    if not language:
        raise ValueError(f"Cannot detect the language of {path}; pass --language")
    language = language.lower()
    registry.require(language)

    if args.fix:
        if args.lenient:
            corrected = repair(text, language, args.disable)
        else:
            corrected = analyze_text(path, text, language, args.disable).corrected_text
        sys.stdout.write(corrected)
        return 0

    analyzed = analyze_text(path, text, language, args.disable)

    if args.format == "json":
        formatter = get_formatter("json")
    else:
        formatter = get_formatter("text", use_color=not args.no_color, verbose=args.verbose)
    print(formatter.format_findings(analyzed.findings))

    return 1 if analyzed.count(Severity.ERROR) else 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Execute the scan command."""
    config = _load_config(args)

    # Apply command-line overrides
    if args.exclude:
        config.exclude_patterns = config.exclude_patterns + args.exclude
    if args.disable:
        config.disabled_rules = config.disabled_rules + args.disable
    if args.jobs is not None:
        config.max_workers = args.jobs
    if args.severity:
        config.severity_threshold = args.severity
    if args.format:
        config.output.format = args.format
    if args.verbose:
        config.output.verbose = True
    if args.no_color:
        config.output.color = False
    config.validate()

    walker = ProjectWalker(config.to_walker_config())

    if config.output.verbose and config.output.format == "text":
        print(f"Analyzing {os.path.abspath(args.target)}...")

    report = walker.analyze_path(args.target)

    # Format output
    if config.output.format == "text":
        formatter = get_formatter(
            "text",
            use_color=config.output.color and not args.output,
            verbose=config.output.verbose,
            show_snippets=config.output.show_snippets,
            min_severity=config.threshold,
        )
    else:
        formatter = get_formatter(config.output.format, min_severity=config.threshold)

    output = formatter.format_result(report)

    # Write output
    output_file = args.output or config.output.output_file
    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(output)
        if config.output.format == "text":
            print(f"Results written to {output_file}")
    else:
        print(output)

    # Return exit code based on findings
    return 1 if report.has_errors else 0


def cmd_fix(args: argparse.Namespace) -> int:
    """Execute the fix command."""
    config = _load_config(args)
    dry_run = args.dry_run or config.fix.dry_run
    backup = config.fix.backup and not args.no_backup

    walker = ProjectWalker(config.to_walker_config())
    report = walker.analyze_path(args.target)

    for error in report.errors:
        print(f"Warning: {error}", file=sys.stderr)

    if report.stats.fixable == 0:
        print("No fixable findings!")
        return 0

    results = write_corrections(report.files, backup=backup, dry_run=dry_run)
    print(format_fix_report(results, dry_run=dry_run))

    if dry_run:
        print("\n[DRY RUN] No files were modified.")
        return 0

    written = [r for r in results if r.success]
    print(f"\nFixed {len(written)}/{len(results)} files.")

    # Report what still needs a human
    for result in written:
        report.apply_fixes(result.path)
    left = report.stats
    if left.total_findings:
        print(f"Remaining findings: {left.errors} errors, {left.warnings} warnings, {left.infos} info")

    return 0 if len(written) == len(results) else 1


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    if os.path.exists(CONFIG_FILE) and not args.force:
        print(f"Configuration file {CONFIG_FILE} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
        f.write(content)

    print(f"Created configuration file: {CONFIG_FILE}")
    return 0


def cmd_list_rules(args: argparse.Namespace) -> int:
    """Execute the list-rules command."""
    if args.language:
        languages = [args.language.lower()]
        registry.require(args.language)
    else:
        languages = registry.languages

    print("\nAvailable Rules")
    print("=" * 70)

    total = 0
    for language in languages:
        rules = registry.rules_for(language)
        total += len(rules)

        print(f"\n{language} ({len(rules)} rules):")
        print("-" * 70)
        for rule in rules:
            status = "fix" if rule.fixable else "   "
            print(f"  {status} {rule.rule_id:<10} {rule.name:<30} [{rule.severity.value}]")

    print(f"\nTotal: {total} rules")
    print("fix = automatically fixable")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(getattr(args, "verbose", False))

    try:
        if args.command == "check":
            return cmd_check(args)
        elif args.command == "scan":
            return cmd_scan(args)
        elif args.command == "fix":
            return cmd_fix(args)
        elif args.command == "init":
            return cmd_init(args)
        elif args.command == "list-rules":
            return cmd_list_rules(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
