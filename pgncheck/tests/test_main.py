# ==============================================================================
# test_main.py  –  Single-file CLI: output and exit codes
# ==============================================================================

import pytest

from pgncheck.main import EXIT_FAILURE, EXIT_OK, main

VALID_GAME = """\
[Event "Test"]
[Date "2024.01.15"]
[Result "*"]

1. e4 e5 *
"""


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    monkeypatch.setenv("PGNCHECK_LOG_LEVEL", "CRITICAL")
    monkeypatch.delenv("PGNCHECK_LOG_DIR", raising=False)
    monkeypatch.delenv("PGNCHECK_FIX_DELIMITERS", raising=False)


def test_version(capsys):
    assert main(["--version"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("pgncheck version ")


def test_missing_argument_prints_usage(capsys):
    assert main([]) == EXIT_FAILURE
    out = capsys.readouterr().out
    assert "usage: pgncheck" in out
    assert "pgncheck -o corrected.pgn game.pgn" in out


def test_nonexistent_file(tmp_path):
    assert main([str(tmp_path / "ghost.pgn")]) == EXIT_FAILURE


def test_valid_file(tmp_path, capsys):
    path = tmp_path / "ok.pgn"
    path.write_text(VALID_GAME, encoding="utf-8")

    assert main(["--no-progress", str(path)]) == EXIT_OK
    assert "✓ PGN file is valid!" in capsys.readouterr().out


def test_issues_and_corrected_output(tmp_path, capsys):
    path = tmp_path / "bad.pgn"
    path.write_text(VALID_GAME.replace("2024.01.15", "15/01/2024"), encoding="utf-8")
    out_path = tmp_path / "fixed.pgn"

    assert main(["-o", str(out_path), str(path)]) == EXIT_FAILURE

    out = capsys.readouterr().out
    assert f"✓ Corrected file saved to: {out_path}" in out
    assert "✗ Found 1 errors in PGN file:" in out
    assert "Line 2: Date auto-corrected: '15/01/2024' → '2024.01.15'" in out
    assert out_path.read_text(encoding="utf-8") == VALID_GAME


def test_fix_delimiters_flag(tmp_path):
    path = tmp_path / "open.pgn"
    path.write_text("1. e4 (1. d4\n", encoding="utf-8")
    out_path = tmp_path / "fixed.pgn"

    main(["--fix-delimiters", "-o", str(out_path), str(path)])
    assert out_path.read_text(encoding="utf-8") == "1. e4 (1. d4)\n"


def test_unwritable_output(tmp_path):
    path = tmp_path / "ok.pgn"
    path.write_text(VALID_GAME, encoding="utf-8")

    code = main(["-o", str(tmp_path / "no" / "such" / "dir.pgn"), str(path)])
    assert code == EXIT_FAILURE
