# ==============================================================================
# validator.py  –  Streaming PGN validation and correction
# ------------------------------------------------------------------------------
# Public API:
#   • validate(lines)                  → list[Issue]
#   • correct(lines, sink)             → list[Issue]  (also writes 1 line per line)
#   • validate_file(path)              → list[Issue]  (I/O problems become issues)
#   • correct_file(input, output)      → list[Issue]  (I/O problems raise PgnIOError)
#
# Both passes run the very same per-line routine, so line numbering of the
# report and of the corrected output can never drift apart. Every call owns
# a fresh RunState; nothing survives between files.
# ==============================================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Protocol, Union

from pgncheck.utils.config_utils import Settings, load_settings
from pgncheck.utils.logging_utils import get_logger
from pgncheck.utils.progress import progress_bar
from pgncheck.validation import issues
from pgncheck.validation.classifier import LineKind, classify_line
from pgncheck.validation.issues import FILE_LEVEL, Issue, RunState
from pgncheck.validation.movetext_checker import (
    check_movetext,
    fix_balanced_delimiters,
)
from pgncheck.validation.tag_checker import check_tag

LOGGER = get_logger("validator")

PathLike = Union[str, Path]
LineHook = Callable[[str], None]

# Non-UTF-8 bytes (Latin-1 exports are common) are carried through as lone
# surrogates: they fail the movetext charset check and are written back
# byte-for-byte by the correction pass.
UNDECODABLE = "surrogateescape"


class PgnIOError(RuntimeError):
    """Reading or writing a PGN stream failed (content problems never raise)."""


class LineSink(Protocol):
    def write(self, text: str) -> object: ...


# ------------------------------------------------------------------------------
# Per-line routine
# ------------------------------------------------------------------------------


def _process_line(raw: str, state: RunState, fix_delimiters: bool) -> str:
    """
    Check one physical line and return the text to emit in its place
    (without the newline).
    """
    state.line_number += 1
    line = raw.strip()
    output = raw.rstrip("\r\n")

    kind = classify_line(line, state)
    if kind is LineKind.TAG:
        fixed = check_tag(line, state)
        if fixed is not None:
            output = fixed
    elif kind is LineKind.MOVETEXT:
        check_movetext(line, state)
        if fix_delimiters:
            output = fix_balanced_delimiters(output)

    return output


def _same_file(first: PathLike, second: PathLike) -> bool:
    """True when both paths name one file (symlinks and hard links included)."""
    try:
        return os.path.samefile(first, second)
    except OSError:
        return Path(first).resolve() == Path(second).resolve()


def _read_lines(lines: Iterable[str], on_line: Optional[LineHook]) -> Iterator[str]:
    """
    Yield raw lines; read failures propagate as `OSError`/`UnicodeDecodeError`
    from the underlying iterator.
    """
    for raw in lines:
        if on_line is not None:
            on_line(raw)
        yield raw


# ------------------------------------------------------------------------------
# Core API
# ------------------------------------------------------------------------------


def validate(lines: Iterable[str], on_line: Optional[LineHook] = None) -> List[Issue]:
    """
    Scan a PGN line stream and return every finding in line order.

    A read failure stops the scan and is reported as one final issue at the
    last line reached. Content problems never raise.
    """
    state = RunState()
    try:
        for raw in _read_lines(lines, on_line):
            _process_line(raw, state, fix_delimiters=False)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Read failed after line %d – %s", state.line_number, exc)
        state.add(issues.read_error(exc))

    LOGGER.debug(
        "Scanned %d line(s), %d issue(s)", state.line_number, len(state.issues)
    )
    return state.issues


def correct(
    lines: Iterable[str],
    sink: LineSink,
    *,
    fix_delimiters: bool = False,
    on_line: Optional[LineHook] = None,
) -> List[Issue]:
    """
    Write a corrected copy of `lines` to `sink` and return the findings.

    Exactly one newline-terminated output line is written per input line.
    Only Date/EventDate values are rewritten, plus movetext delimiters when
    `fix_delimiters` is on.

    Raises
    ------
    PgnIOError
        If reading the input or writing to `sink` fails.
    """
    state = RunState()
    reader = _read_lines(lines, on_line)
    while True:
        try:
            raw = next(reader)
        except StopIteration:
            break
        except (OSError, UnicodeDecodeError) as exc:
            raise PgnIOError(f"error reading: {exc}") from exc

        output = _process_line(raw, state, fix_delimiters)
        try:
            sink.write(output + "\n")
        except OSError as exc:
            raise PgnIOError(f"error writing: {exc}") from exc

    LOGGER.debug(
        "Corrected %d line(s), %d issue(s)", state.line_number, len(state.issues)
    )
    return state.issues


# ------------------------------------------------------------------------------
# File wrappers
# ------------------------------------------------------------------------------


def validate_file(
    path: PathLike,
    settings: Optional[Settings] = None,
    show_progress: Optional[bool] = None,
) -> List[Issue]:
    """
    Validate a PGN file on disk.

    Failing to open or stat the file yields a single line-0 issue instead of
    an exception.
    """
    settings = settings or load_settings()

    try:
        handle = open(path, "r", encoding="utf-8", errors=UNDECODABLE)
    except OSError as exc:
        return [Issue(FILE_LEVEL, issues.cannot_open(exc))]

    with handle:
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            return [Issue(FILE_LEVEL, issues.cannot_stat(exc))]

        tracker = progress_bar(
            size,
            "Validating",
            threshold=settings.progress_threshold,
            every=settings.progress_every,
            enabled=show_progress,
        )
        try:
            found = validate(handle, on_line=tracker.update)
        finally:
            tracker.finish()

    LOGGER.info("Validated %s – %d issue(s)", path, len(found))
    return found


def correct_file(
    input_path: PathLike,
    output_path: PathLike,
    settings: Optional[Settings] = None,
    fix_delimiters: Optional[bool] = None,
    show_progress: Optional[bool] = None,
) -> List[Issue]:
    """
    Write a corrected copy of `input_path` to `output_path`.

    Raises
    ------
    PgnIOError
        On any open/stat/create/read/write failure, and before touching
        anything when `output_path` is the input file itself.
    """
    settings = settings or load_settings()
    if fix_delimiters is None:
        fix_delimiters = settings.fix_delimiters

    if _same_file(input_path, output_path):
        raise PgnIOError(
            f"output file is the input file: {output_path} (choose another path)"
        )

    try:
        source = open(input_path, "r", encoding="utf-8", errors=UNDECODABLE)
    except OSError as exc:
        raise PgnIOError(f"cannot open input file: {exc}") from exc

    with source:
        try:
            size = os.fstat(source.fileno()).st_size
        except OSError as exc:
            raise PgnIOError(f"cannot get file info: {exc}") from exc

        try:
            target = open(
                output_path,
                "w",
                encoding="utf-8",
                errors=UNDECODABLE,
                newline="\n",
            )
        except OSError as exc:
            raise PgnIOError(f"cannot create output file: {exc}") from exc

        tracker = progress_bar(
            size,
            "Correcting",
            threshold=settings.progress_threshold,
            every=settings.progress_every,
            enabled=show_progress,
        )
        try:
            with target:
                found = correct(
                    source,
                    target,
                    fix_delimiters=fix_delimiters,
                    on_line=tracker.update,
                )
        except OSError as exc:  # flush/close of the output file
            raise PgnIOError(f"error writing: {exc}") from exc
        finally:
            tracker.finish()

    LOGGER.info(
        "Corrected copy of %s written to %s (delimiter repair %s)",
        input_path,
        output_path,
        "on" if fix_delimiters else "off",
    )
    return found
