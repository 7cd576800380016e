# ==============================================================================
# tag_checker.py  –  Header tag grammar, Date/EventDate and Result checks
# ------------------------------------------------------------------------------
# Header lines look like:  [Name "Value"]
#
#   • Malformed lines         → "Malformed PGN tag" issue
#   • Date / EventDate values → accepted, auto-corrected, or rejected
#   • Result values           → must be 1-0, 0-1, 1/2-1/2 or *
#   • Every other tag         → accepted as-is
#
# Day-first convention: "NN/NN/NNNN" is ALWAYS read as DD/MM/YYYY. The
# string alone cannot tell 03/04/2024 (3 April) from MM/DD (4 March), and
# no per-value guessing is attempted.
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pgncheck.utils.logging_utils import get_logger
from pgncheck.validation import issues
from pgncheck.validation.issues import RunState
from pgncheck.validation.patterns import (
    DATE_FIXES,
    KNOWN_DATE,
    TAG,
    VALID_RESULTS,
    WILDCARD_DATE,
)

LOGGER = get_logger("tag_checker")

DATE_TAGS = frozenset({"date", "eventdate"})
RESULT_TAG = "result"


# ------------------------------------------------------------------------------
# Types
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Tag:
    name: str
    value: str


class DateKind(Enum):
    """How a date tag value relates to the canonical ``YYYY.MM.DD`` form."""

    KNOWN = "known"  # YYYY.MM.DD
    WILDCARD = "wildcard"  # ????.??.??  (date unknown)
    NONSTANDARD = "nonstandard"  # anything else: correct or reject


@dataclass(frozen=True)
class DateParts:
    year: str
    month: str
    day: str

    def to_pgn(self) -> str:
        return f"{self.year}.{self.month}.{self.day}"


# ------------------------------------------------------------------------------
# Parsing helpers
# ------------------------------------------------------------------------------


def parse_tag(line: str) -> Optional[Tag]:
    """Return the (name, value) of a trimmed tag line, or None if malformed."""
    match = TAG.fullmatch(line)
    if match is None:
        return None
    return Tag(name=match.group(1), value=match.group(2))


def classify_date(value: str) -> DateKind:
    """Tell canonical, unknown and non-standard date values apart."""
    if KNOWN_DATE.fullmatch(value):
        return DateKind.KNOWN
    if WILDCARD_DATE.fullmatch(value):
        return DateKind.WILDCARD
    return DateKind.NONSTANDARD


def extract_date_parts(value: str) -> Optional[DateParts]:
    """
    Pull (year, month, day) out of the first correctable shape that matches.

    Shapes, in order: YYYY-MM-DD, DD/MM/YYYY, YYYY/MM/DD, YYYYMMDD. Only the
    shape is checked; "2024-13-40" still yields month 13, day 40.
    """
    candidate = value.strip()
    for label, pattern, (y, m, d) in DATE_FIXES:
        match = pattern.fullmatch(candidate)
        if match:
            LOGGER.debug("Date %r matched %s", value, label)
            return DateParts(match.group(y), match.group(m), match.group(d))
    return None


def try_fix_date(value: str) -> Optional[str]:
    """Return `value` rewritten as YYYY.MM.DD, or None if no shape matches."""
    parts = extract_date_parts(value)
    return parts.to_pgn() if parts else None


def is_valid_result(value: str) -> bool:
    return value in VALID_RESULTS


# ------------------------------------------------------------------------------
# Checks
# ------------------------------------------------------------------------------


def check_date(value: str, state: RunState) -> Optional[str]:
    """
    Record the outcome of a Date/EventDate value.

    Returns the corrected value when an auto-correction applies, else None.
    Corrections are still reported as issues.
    """
    if classify_date(value) is not DateKind.NONSTANDARD:
        return None

    fixed = try_fix_date(value)
    if fixed is None:
        state.add(issues.invalid_date(value))
        return None

    state.add(issues.date_corrected(value, fixed))
    return fixed


def check_result(value: str, state: RunState) -> None:
    if not is_valid_result(value):
        state.add(issues.invalid_result(value))


def check_tag(line: str, state: RunState) -> Optional[str]:
    """
    Validate one trimmed header line.

    Returns
    -------
    str | None
        The rewritten tag line when a date was auto-corrected, else None.
    """
    tag = parse_tag(line)
    if tag is None:
        state.add(issues.malformed_tag(line))
        return None

    name = tag.name.lower()
    if name in DATE_TAGS:
        fixed = check_date(tag.value, state)
        if fixed is not None:
            return f'[{tag.name} "{fixed}"]'
    elif name == RESULT_TAG:
        check_result(tag.value, state)

    return None
