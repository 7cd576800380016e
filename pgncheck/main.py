#!/usr/bin/env python3
# ==============================================================================
#  pgncheck - main.py
#  Purpose: command-line entry for validating (and optionally correcting)
#           a single PGN file
#
#  Usage:  pgncheck [-o corrected.pgn] [--fix-delimiters] [-v] game.pgn
#  Exit:   0 when no issues were found, 1 otherwise (or on I/O failure)
# ==============================================================================

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional, Sequence

from pgncheck.utils.config_utils import Settings, load_settings
from pgncheck.utils.logging_utils import setup_logger
from pgncheck.validation.issues import Issue
from pgncheck.validation.validator import PgnIOError, correct_file, validate_file

EXIT_OK = 0
EXIT_FAILURE = 1

USAGE_EXAMPLES = """\
examples:
  pgncheck game.pgn
  pgncheck -o corrected.pgn game.pgn
  pgncheck --version
"""


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------


def _package_version() -> str:
    try:
        return version("pgncheck")
    except PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgncheck",
        description="Validate a PGN file and optionally write a corrected copy.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", help="PGN file to validate")
    parser.add_argument(
        "-o", "--output", help="write a copy with corrections applied to this file"
    )
    parser.add_argument(
        "--fix-delimiters",
        action="store_true",
        default=None,
        help="also repair unbalanced ( ) and { } in movetext when correcting",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="never show a progress bar"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="show version information"
    )
    return parser


def print_report(found: List[Issue]) -> None:
    """Print the verdict line followed by every issue in order."""
    if not found:
        print("✓ PGN file is valid!")
        return

    print(f"✗ Found {len(found)} errors in PGN file:\n")
    for issue in found:
        print(issue.printable())


def _stage(logger, title: str, fn):
    """Run a step with start → finish logging; full stacktrace on failure."""
    logger.info("%s – started", title)
    try:
        result = fn()
        logger.info("%s – finished", title)
        return result
    except Exception:
        logger.exception("%s – failed", title)
        raise


# ------------------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"pgncheck version {_package_version()}")
        return EXIT_OK

    if not args.file:
        parser.print_usage()
        print(USAGE_EXAMPLES, end="")
        return EXIT_FAILURE

    settings: Settings = load_settings()
    if args.fix_delimiters is not None:
        settings = replace(settings, fix_delimiters=args.fix_delimiters)
    logger = setup_logger(
        "pgncheck", level=settings.log_level, logs_dir=settings.log_dir
    )

    source = Path(args.file)
    if not source.exists():
        logger.error("Error: file '%s' not found", source)
        return EXIT_FAILURE

    show_progress = False if args.no_progress else None
    found = _stage(
        logger,
        f"Validate {source.name}",
        lambda: validate_file(source, settings=settings, show_progress=show_progress),
    )

    if args.output:
        try:
            _stage(
                logger,
                f"Correct {source.name}",
                lambda: correct_file(
                    source,
                    args.output,
                    settings=settings,
                    show_progress=show_progress,
                ),
            )
        except PgnIOError as exc:
            logger.error("Error writing corrected file: %s", exc)
            return EXIT_FAILURE
        print(f"✓ Corrected file saved to: {args.output}")

    print_report(found)
    return EXIT_OK if not found else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
