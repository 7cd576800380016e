#!/usr/bin/env python3
# ==============================================================================
# run_batch.py  –  Validate every *.pgn file below a directory
# ------------------------------------------------------------------------------
# Steps:
#   • Collect *.pgn files recursively (sorted for stable output)
#   • Validate each one; with an output directory, also write a corrected
#     copy at the same relative path below it
#   • Print a per-file verdict and a final summary
#
# Usage:  pgncheck-batch <directory> [-o output_directory]
# ==============================================================================

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pgncheck.utils.config_utils import Settings, load_settings
from pgncheck.utils.logging_utils import get_logger, setup_logger
from pgncheck.validation.validator import PgnIOError, correct_file, validate_file

RULE = "=" * 41


@dataclass
class BatchSummary:
    total: int = 0
    valid: int = 0
    invalid: int = 0
    output_dir: Optional[Path] = None
    invalid_files: List[Path] = field(default_factory=list)

    @property
    def all_valid(self) -> bool:
        return self.invalid == 0


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------


def find_pgn_files(input_dir: Path, exclude: Optional[Path] = None) -> List[Path]:
    """All *.pgn files below `input_dir`, skipping anything under `exclude`."""
    skip = exclude.resolve() if exclude is not None else None
    return sorted(
        p
        for p in input_dir.rglob("*.pgn")
        if p.is_file() and (skip is None or skip not in p.resolve().parents)
    )


def _print_banner(input_dir: Path, total: int, output_dir: Optional[Path]) -> None:
    print(RULE)
    print("PGN Validator - Batch Processing")
    print(RULE)
    print(f"Directory: {input_dir}")
    print(f"Total files: {total}")
    if output_dir is not None:
        print(f"Output directory: {output_dir}")
    print(RULE)
    print()


def _print_summary(summary: BatchSummary) -> None:
    print(RULE)
    print("Summary")
    print(RULE)
    print(f"Total processed: {summary.total}")
    print(f"Valid files: {summary.valid}")
    print(f"Files with errors: {summary.invalid}")
    if summary.output_dir is not None:
        print(f"Corrected files saved to: {summary.output_dir}")
    print(RULE)


def _process_file(
    path: Path,
    input_dir: Path,
    output_dir: Optional[Path],
    settings: Settings,
    logger,
) -> List[str]:
    """Validate (and maybe correct) one file; return its report lines."""
    found = validate_file(path, settings=settings, show_progress=False)
    report = [issue.printable() for issue in found]

    if output_dir is not None:
        destination = output_dir / path.relative_to(input_dir)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            correct_file(path, destination, settings=settings, show_progress=False)
        except OSError as exc:
            logger.error("Could not create %s – %s", destination.parent, exc)
            report.append(f"Error: {exc}")
        except PgnIOError as exc:
            logger.error("Could not write corrected copy of %s – %s", path, exc)
            report.append(f"Error: {exc}")

    return report


# ------------------------------------------------------------------------------
# Controller
# ------------------------------------------------------------------------------


def run_batch(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path, None] = None,
    settings: Optional[Settings] = None,
) -> BatchSummary:
    """
    Validate all PGN files under `input_dir`.

    Raises
    ------
    FileNotFoundError
        If `input_dir` is not a directory.
    ValueError
        If `output_dir` is `input_dir` itself (copies would replace originals).
    """
    settings = settings or load_settings()
    setup_logger("pgncheck", level=settings.log_level, logs_dir=settings.log_dir)
    logger = get_logger("batch")

    source = Path(input_dir)
    if not source.is_dir():
        raise FileNotFoundError(f"Directory '{source}' not found")

    target = Path(output_dir) if output_dir is not None else None
    if target is not None and target.resolve() == source.resolve():
        raise ValueError(
            f"Output directory '{target}' is the input directory; choose another"
        )
    if target is not None:
        target.mkdir(parents=True, exist_ok=True)

    files = find_pgn_files(source, exclude=target)
    summary = BatchSummary(output_dir=target)
    if not files:
        print(f"No PGN files found in '{source}'")
        return summary

    _print_banner(source, len(files), target)
    logger.info("Processing %d file(s) from %s", len(files), source)

    for idx, path in enumerate(files, 1):
        print(f"[{idx}/{len(files)}] Processing: {path.name}")
        report = _process_file(path, source, target, settings, logger)
        summary.total += 1

        if report:
            summary.invalid += 1
            summary.invalid_files.append(path)
            print("  ✗ Errors found")
            for line in report:
                print(f"    {line}")
        else:
            summary.valid += 1
            print("  ✓ Valid")
        print()

    _print_summary(summary)
    logger.info("Done. Valid=%d  Invalid=%d", summary.valid, summary.invalid)
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pgncheck-batch",
        description="Validate every PGN file in a directory tree.",
    )
    parser.add_argument("directory", help="directory to scan for *.pgn files")
    parser.add_argument(
        "-o", "--output", dest="output_dir", help="write corrected copies here"
    )
    args = parser.parse_args(argv)

    try:
        summary = run_batch(args.directory, args.output_dir)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1

    return 0 if summary.all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
