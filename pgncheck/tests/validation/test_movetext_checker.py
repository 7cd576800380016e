# ==============================================================================
# test_movetext_checker.py  –  Charset, delimiters, numbering and move grammar
# ==============================================================================

import pytest

from pgncheck.validation.issues import RunState
from pgncheck.validation.movetext_checker import (
    check_movetext,
    check_notation,
    fix_balanced_delimiters,
    has_allowed_charset,
    is_balanced,
    is_properly_nested,
    is_valid_move,
    iter_numbered_moves,
    remove_comments,
    remove_variations,
)


def _run(line):
    state = RunState(line_number=9)
    check_movetext(line, state)
    return [issue.message for issue in state.issues]


# ------------------------------------------------------------------------------
# Move grammar
# ------------------------------------------------------------------------------
@pytest.mark.parametrize(
    "token",
    [
        "e4",
        "Nf3",
        "O-O",
        "O-O-O",
        "0-0",
        "0-0-0+",
        "e8=Q",
        "ed8=N",
        "exd5",
        "Qh5+",
        "Qh4#",
        "Nbd7",
        "R1c3",
        "Qh4e1",
        "Bxe5",
        "Raxb1",
        "e4!",
        "Nf3?!",
        "Qxf7#!!",
        "1-0",
        "0-1",
        "1/2-1/2",
        "*",
    ],
)
def test_valid_moves(token):
    assert is_valid_move(token) is True


@pytest.mark.parametrize(
    "token",
    ["Xe1", "b9", "Qj5", "e8=K", "K", "exd", "O-O-O-O", "Pe4", "e4e5", "", "..."],
)
def test_invalid_moves(token):
    assert is_valid_move(token) is False


# ------------------------------------------------------------------------------
# Character set
# ------------------------------------------------------------------------------
def test_charset_accepts_regular_movetext():
    assert has_allowed_charset("1. e4 {best by test} (1. d4) e5! 2. Nf3 1/2-1/2")
    assert has_allowed_charset("1. e4\te5\f2. Nf3")


@pytest.mark.parametrize("separator", ["\v", "\x1c", "\x1d", "\x1e", "\x1f"])
def test_charset_rejects_control_whitespace(separator):
    line = f"1. e4{separator}e5"
    assert not has_allowed_charset(line)
    assert "Invalid move format: disallowed characters found" in _run(line)


@pytest.mark.parametrize(
    "line", ["1. e4 $1", "1. e4 ; comment", "1. é4", "1. e4 [%clk]"]
)
def test_charset_rejects_other_symbols(line):
    assert not has_allowed_charset(line)
    assert "Invalid move format: disallowed characters found" in _run(line)


# ------------------------------------------------------------------------------
# Delimiters
# ------------------------------------------------------------------------------
@pytest.mark.parametrize(
    "line,expected",
    [
        ("(1. e4 (e5))", True),
        ("(1. e4", False),
        ("1. e4)", False),
        (")(", False),
        ("no variations", True),
    ],
)
def test_parenthesis_balance(line, expected):
    assert is_balanced(line, "(", ")") is expected


def test_balance_counts_each_pair_independently():
    assert is_balanced("({)}", "(", ")")
    assert is_balanced("({)}", "{", "}")
    assert not is_properly_nested("({)}")


@pytest.mark.parametrize(
    "line,expected",
    [
        ("1. e4 {good} (1. d4 {also (fine)})", True),
        ("({)}", False),
        ("}", False),
        ("{", False),
        ("", True),
    ],
)
def test_nesting(line, expected):
    assert is_properly_nested(line) is expected


def test_unbalanced_line_reports_balance_and_nesting():
    messages = _run("1. e4 (1. d4 d5 2. c4")
    assert "Warning: Unbalanced parentheses in variations" in messages
    assert "Warning: Improper nesting of parentheses and braces" in messages
    assert "Warning: Unbalanced curly braces in comments" not in messages


def test_unbalanced_braces_message():
    assert "Warning: Unbalanced curly braces in comments" in _run("1. e4 {unclosed")


def test_interleaved_delimiters_only_flag_nesting():
    messages = _run("1. e4 ({)} e5")
    assert messages.count("Warning: Improper nesting of parentheses and braces") == 1
    assert "Warning: Unbalanced parentheses in variations" not in messages
    assert "Warning: Unbalanced curly braces in comments" not in messages


@pytest.mark.parametrize(
    "line,expected",
    [
        ("1. e4 (1. d4", "1. e4 (1. d4)"),
        ("1. e4) e5", "1. e4 e5"),
        ("1. e4 {note (x", "1. e4 {note (x)}"),
        ("({)}", "({})"),
        ("1. e4 e5", "1. e4 e5"),
    ],
)
def test_fix_balanced_delimiters(line, expected):
    fixed = fix_balanced_delimiters(line)
    assert fixed == expected
    assert is_properly_nested(fixed)


# ------------------------------------------------------------------------------
# Stripping
# ------------------------------------------------------------------------------
def test_remove_comments_is_not_depth_aware():
    assert remove_comments("a {b {c} d} e") == "a  d e"


def test_remove_variations_handles_nesting():
    assert remove_variations("1. e4 (1. d4 (1. c4) d5) e5") == "1. e4  e5"


def test_remove_variations_ignores_stray_close():
    assert remove_variations("e4) e5") == "e4 e5"


# ------------------------------------------------------------------------------
# Numbering
# ------------------------------------------------------------------------------
def test_iter_numbered_moves():
    assert list(iter_numbered_moves("1. e4 e5 2.Nf3")) == [
        (1, "e4", "e5"),
        (2, "Nf3", None),
    ]


def test_out_of_sequence_reported_once():
    state = RunState(line_number=1)
    check_notation("1. e4 e5 3. Nf3 Nc6", state)
    assert [i.message for i in state.issues] == [
        "Warning: Move number out of sequence. Expected 2, found 3"
    ]


def test_sequence_resynchronises_after_gap():
    state = RunState(line_number=1)
    check_notation("1. e4 e5 5. Nf3 Nc6 6. Bb5 a6 7. O-O", state)
    assert len(state.issues) == 1


def test_first_number_on_a_line_seeds_the_sequence():
    state = RunState(line_number=1)
    check_notation("12. Nf3 Nc6 13. Bb5 a6", state)
    assert state.issues == []


def test_moves_inside_comments_and_variations_are_skipped():
    state = RunState(line_number=1)
    check_notation("1. e4 {2. Zz9} (1. Xx1 Yy2) e5 2. Nf3", state)
    assert state.issues == []


def test_invalid_move_cites_token_and_number():
    state = RunState(line_number=1)
    check_notation("1. e4 e5 2. Qj5 b9", state)
    assert [i.message for i in state.issues] == [
        "Warning: Invalid move notation 'Qj5' at move 2",
        "Warning: Invalid move notation 'b9' at move 2",
    ]


def test_clean_game_line_has_no_issues():
    assert _run("1. e4 e5 2. Nf3 Nc6 3. Bb5 a6 1-0") == []


def test_issues_carry_the_current_line_number():
    state = RunState(line_number=42)
    check_movetext("1. e4 e5 3. Xe1", state)
    assert {issue.line_number for issue in state.issues} == {42}
