# ==============================================================================
# movetext_checker.py  –  Per-line checks for the move section
# ------------------------------------------------------------------------------
# Every movetext line goes through four independent checks, and one line can
# collect several issues:
#   1. Character set   (letters, digits, whitespace, +#=-!?().*/{})
#   2. Balance         ( ) and { } counted separately, per line
#   3. Nesting         stack check across both pairs, catches "({)}"
#   4. Notation        "<n>. <move> [<move>]" sequencing + token grammar
#
# Delimiters are checked per line only: a variation opened on one line and
# closed on a later one is reported on both lines.
# ==============================================================================

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from pgncheck.validation import issues
from pgncheck.validation.issues import RunState
from pgncheck.validation.patterns import (
    CASTLING,
    GAME_TERMINATORS,
    MOVETEXT_CHARSET,
    NUMBERED_MOVE,
    PAWN_ADVANCE,
    PAWN_CAPTURE,
    PIECE_MOVE,
    PROMOTION,
)

_PAIRS = {")": "(", "}": "{"}
_CLOSERS = {"(": ")", "{": "}"}


# ------------------------------------------------------------------------------
# Delimiters
# ------------------------------------------------------------------------------


def has_allowed_charset(line: str) -> bool:
    return MOVETEXT_CHARSET.fullmatch(line) is not None


def is_balanced(line: str, open_char: str, close_char: str) -> bool:
    """True when every `close_char` follows a matching `open_char` and none is left open."""
    depth = 0
    for char in line:
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def is_properly_nested(line: str) -> bool:
    stack: List[str] = []
    for char in line:
        if char in _CLOSERS:
            stack.append(char)
        elif char in _PAIRS:
            if not stack or stack[-1] != _PAIRS[char]:
                return False
            stack.pop()
    return not stack


def fix_balanced_delimiters(line: str) -> str:
    """
    Repair delimiter structure of one movetext line.

    Closers without a matching opener on top of the stack are dropped;
    openers still pending at end of line get their closers appended,
    innermost first.
    """
    result: List[str] = []
    stack: List[str] = []

    for char in line:
        if char in _CLOSERS:
            result.append(char)
            stack.append(char)
        elif char in _PAIRS:
            if stack and stack[-1] == _PAIRS[char]:
                result.append(char)
                stack.pop()
        else:
            result.append(char)

    result.extend(_CLOSERS[opener] for opener in reversed(stack))
    return "".join(result)


# ------------------------------------------------------------------------------
# Stripping comments / variations
# ------------------------------------------------------------------------------


def remove_comments(line: str) -> str:
    """Drop `{...}` spans. Not depth-aware: `{` enters, `}` leaves."""
    kept: List[str] = []
    in_comment = False
    for char in line:
        if char == "{":
            in_comment = True
        elif char == "}":
            in_comment = False
        elif not in_comment:
            kept.append(char)
    return "".join(kept)


def remove_variations(line: str) -> str:
    """Drop `(...)` spans, nested ones included; stray `)` is ignored."""
    kept: List[str] = []
    depth = 0
    for char in line:
        if char == "(":
            depth += 1
        elif char == ")":
            if depth > 0:
                depth -= 1
        elif depth == 0:
            kept.append(char)
    return "".join(kept)


# ------------------------------------------------------------------------------
# Move tokens
# ------------------------------------------------------------------------------


def is_valid_move(token: str) -> bool:
    """
    Check one SAN-like move token (lexical shape only, not legality).

    Accepts result markers, castling (``O-O``/``0-0`` forms), promotions,
    piece moves with optional disambiguation and pawn moves. Trailing
    ``!``/``?`` annotations and ``+``/``#`` suffixes are ignored.
    """
    move = token.rstrip("!?")
    if move in GAME_TERMINATORS:
        return True

    move = move.rstrip("+#")
    if move in CASTLING:
        return True

    return any(
        pattern.fullmatch(move)
        for pattern in (PROMOTION, PIECE_MOVE, PAWN_CAPTURE, PAWN_ADVANCE)
    )


def iter_numbered_moves(line: str) -> Iterator[Tuple[int, str, Optional[str]]]:
    """Yield (number, first move, second move or None) from cleaned movetext."""
    for match in NUMBERED_MOVE.finditer(line):
        yield int(match.group(1)), match.group(2), match.group(3)


def check_notation(line: str, state: RunState) -> None:
    """
    Check move numbering and every move token on one line.

    The first number seeds the expected counter. A mismatch is reported once
    and the counter resynchronises to the number actually found.
    """
    cleaned = remove_variations(remove_comments(line))
    expected: Optional[int] = None

    for number, first, second in iter_numbered_moves(cleaned):
        if expected is None:
            expected = number
        else:
            expected += 1
            if number != expected:
                state.add(issues.move_out_of_sequence(expected, number))
                expected = number

        for token in (first, second):
            if token and not is_valid_move(token):
                state.add(issues.invalid_move(token, number))


# ------------------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------------------


def check_movetext(line: str, state: RunState) -> None:
    """Run every movetext check on one trimmed line."""
    if not has_allowed_charset(line):
        state.add(issues.DISALLOWED_CHARACTERS)

    if not is_balanced(line, "(", ")"):
        state.add(issues.UNBALANCED_PARENTHESES)

    if not is_balanced(line, "{", "}"):
        state.add(issues.UNBALANCED_BRACES)

    if not is_properly_nested(line):
        state.add(issues.IMPROPER_NESTING)

    check_notation(line, state)
