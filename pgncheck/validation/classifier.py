# ==============================================================================
# classifier.py  –  Route each physical line to the right checker
#
# Three outcomes per trimmed line:
#   • BLANK     → skipped, header flag unchanged
#   • TAG       → header flag set, line goes to the tag checker
#   • MOVETEXT  → header flag cleared, line goes to the movetext checker
# ==============================================================================

from __future__ import annotations

from enum import Enum

from pgncheck.validation.issues import RunState


class LineKind(Enum):
    BLANK = "blank"
    TAG = "tag"
    MOVETEXT = "movetext"


def classify_line(line: str, state: RunState) -> LineKind:
    """
    Classify an already-trimmed line and update `state.in_header`.

    Any line starting with ``[`` is a tag candidate, even after movetext has
    started (that is how the next game of a multi-game file begins). The
    classifier never records issues.
    """
    if not line:
        return LineKind.BLANK

    if line.startswith("["):
        state.in_header = True
        return LineKind.TAG

    # First move line closes the header block
    state.in_header = False
    return LineKind.MOVETEXT
