# ==============================================================================
# config_utils.py  –  Environment-driven settings for pgncheck
#
# Centralizes:
#   • .env loading (process environment wins over the file)
#   • Delimiter repair switch for the correction pass
#   • Progress bar threshold / refresh cadence
#   • Log level and optional log directory
# ==============================================================================

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

ROOT_ENV = Path(__file__).resolve().parents[2] / ".env"

_DEFAULT_PROGRESS_THRESHOLD = 1024 * 1024  # bytes
_DEFAULT_PROGRESS_EVERY = 1000  # lines


# ------------------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------------------


def _bool_env(var_name: str, default: str = "false") -> bool:
    """Convert TRUE / true / 1 style env vars to bool."""
    return os.getenv(var_name, default).strip().lower() in {"1", "true", "yes"}


def _int_env(var_name: str, default: int) -> int:
    """Read a positive integer env var, falling back to `default` on junk."""
    raw = os.getenv(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# ------------------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Runtime knobs shared by the CLI, the batch runner and the file wrappers."""

    fix_delimiters: bool = False
    progress_threshold: int = _DEFAULT_PROGRESS_THRESHOLD
    progress_every: int = _DEFAULT_PROGRESS_EVERY
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None


def load_settings(env_file: Union[str, Path, None] = None) -> Settings:
    """
    Load `.env` (if present) and build a :class:`Settings` snapshot.

    Notes
    -----
    • Values already exported in the environment override the file.
    • Unparseable numbers fall back to their defaults.
    """
    load_dotenv(dotenv_path=env_file or ROOT_ENV, override=False)

    log_dir = os.getenv("PGNCHECK_LOG_DIR", "").strip()
    return Settings(
        fix_delimiters=_bool_env("PGNCHECK_FIX_DELIMITERS"),
        progress_threshold=_int_env(
            "PGNCHECK_PROGRESS_THRESHOLD", _DEFAULT_PROGRESS_THRESHOLD
        ),
        progress_every=_int_env("PGNCHECK_PROGRESS_EVERY", _DEFAULT_PROGRESS_EVERY),
        log_level=os.getenv("PGNCHECK_LOG_LEVEL", "WARNING").strip().upper()
        or "WARNING",
        log_dir=Path(log_dir) if log_dir else None,
    )
