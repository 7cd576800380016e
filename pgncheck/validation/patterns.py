# ==============================================================================
# patterns.py  –  Compiled grammars shared by every validation run
#
# Compiled once at import and never mutated, so concurrent runs can share
# them without locking. All digit/word classes are ASCII-only and every
# pattern is meant for `fullmatch` unless noted.
# ==============================================================================

from __future__ import annotations

import re
from typing import Final, Pattern, Tuple

# ------------------------------------------------------------------------------
# Header
# ------------------------------------------------------------------------------

# [Name "Value"]  →  (name, value)
TAG: Final[Pattern[str]] = re.compile(r'\[(\w+)\s+"(.*)"\]', re.ASCII)

KNOWN_DATE: Final[Pattern[str]] = re.compile(r"\d{4}\.\d{2}\.\d{2}", re.ASCII)
WILDCARD_DATE: Final[Pattern[str]] = re.compile(r"\?{4}\.\?{2}\.\?{2}")

# Correctable date shapes, tried in this order. The index triple says which
# match groups hold (year, month, day).
DATE_FIXES: Final[Tuple[Tuple[str, Pattern[str], Tuple[int, int, int]], ...]] = (
    ("YYYY-MM-DD", re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII), (1, 2, 3)),
    ("DD/MM/YYYY", re.compile(r"(\d{2})/(\d{2})/(\d{4})", re.ASCII), (3, 2, 1)),
    ("YYYY/MM/DD", re.compile(r"(\d{4})/(\d{2})/(\d{2})", re.ASCII), (1, 2, 3)),
    ("YYYYMMDD", re.compile(r"(\d{4})(\d{2})(\d{2})", re.ASCII), (1, 2, 3)),
)

VALID_RESULTS: Final[frozenset] = frozenset({"1-0", "0-1", "1/2-1/2", "*"})

# ------------------------------------------------------------------------------
# Movetext
# ------------------------------------------------------------------------------

# Whitespace is spelled out: `\s` would also admit \v and the \x1c-\x1f
# separators.
MOVETEXT_CHARSET: Final[Pattern[str]] = re.compile(
    r"[a-zA-Z0-9 \t\n\f\r+#=\-!?().*/{}]+", re.ASCII
)

# "12. Nf3 Nc6" / "12.Nf3"  →  (number, first move, optional second move).
# Used with `finditer`, not `fullmatch`.
NUMBERED_MOVE: Final[Pattern[str]] = re.compile(
    r"(\d+)\.\s*(\S+)(?:\s+(\S+))?", re.ASCII
)

GAME_TERMINATORS: Final[frozenset] = VALID_RESULTS
CASTLING: Final[frozenset] = frozenset({"O-O", "O-O-O", "0-0", "0-0-0"})

PROMOTION: Final[Pattern[str]] = re.compile(r"([a-h])?([a-h][1-8])=([QRBN])")
PIECE_MOVE: Final[Pattern[str]] = re.compile(
    r"([KQRBN])([a-h])?([1-8])?(x)?([a-h][1-8])"
)
PAWN_CAPTURE: Final[Pattern[str]] = re.compile(r"([a-h])(x)?([a-h][1-8])")
PAWN_ADVANCE: Final[Pattern[str]] = re.compile(r"[a-h][1-8]")
