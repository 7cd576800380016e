# ==============================================================================
# issues.py  –  Findings produced by a validation run
#
# An `Issue` is an immutable (line, message) pair. A `RunState` owns the
# ordered issue list plus the header/movetext flag for exactly one scan.
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# Line number used for findings that concern the file as a whole.
FILE_LEVEL = 0


@dataclass(frozen=True)
class Issue:
    """One finding; `line_number` is 1-based, or 0 for file-level errors."""

    line_number: int
    message: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}"

    def printable(self) -> str:
        """`str(self)` with undecodable input bytes shown as `\\xNN` escapes."""
        text = str(self).encode("utf-8", "surrogateescape")
        return text.decode("utf-8", "backslashreplace")


@dataclass
class RunState:
    """
    Mutable state of a single validate/correct invocation.

    `in_header` starts True and is flipped to False by the first non-blank,
    non-tag line. A tag line always sets it back to True (the header block
    of the next game in a multi-game file).
    """

    issues: List[Issue] = field(default_factory=list)
    in_header: bool = True
    line_number: int = 0

    def add(self, message: str, line_number: int | None = None) -> None:
        """Append a finding at the current line (or an explicit one)."""
        self.issues.append(
            Issue(self.line_number if line_number is None else line_number, message)
        )


# ------------------------------------------------------------------------------
# Message builders
# ------------------------------------------------------------------------------


def malformed_tag(line: str) -> str:
    return f"Malformed PGN tag: {line}"


def date_corrected(old: str, new: str) -> str:
    return f"Date auto-corrected: '{old}' → '{new}'"


def invalid_date(value: str) -> str:
    return (
        f"Invalid date format: '{value}'. "
        "Required format: YYYY.MM.DD (example: 2024.01.05)"
    )


def invalid_result(value: str) -> str:
    return f"Invalid result: '{value}'. Valid values: 1-0, 0-1, 1/2-1/2, *"


DISALLOWED_CHARACTERS = "Invalid move format: disallowed characters found"
UNBALANCED_PARENTHESES = "Warning: Unbalanced parentheses in variations"
UNBALANCED_BRACES = "Warning: Unbalanced curly braces in comments"
IMPROPER_NESTING = "Warning: Improper nesting of parentheses and braces"


def move_out_of_sequence(expected: int, found: int) -> str:
    return (
        "Warning: Move number out of sequence. "
        f"Expected {expected}, found {found}"
    )


def invalid_move(token: str, move_number: int) -> str:
    return f"Warning: Invalid move notation '{token}' at move {move_number}"


def cannot_open(exc: BaseException) -> str:
    return f"Cannot open file: {exc}"


def cannot_stat(exc: BaseException) -> str:
    return f"Cannot get file info: {exc}"


def read_error(exc: BaseException) -> str:
    return f"Error reading file: {exc}"
