# ==============================================================================
# logging_utils.py  –  Named loggers for pgncheck
#
# Features:
#   ✔ Console output on stderr (stdout is reserved for the issue report)
#   ✔ Optional timestamped log file when a directory is configured
#   ✔ Idempotent: clears handlers before re-adding
# ==============================================================================

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

# ------------------------------------------------------------------------------
# Constants
# ------------------------------------------------------------------------------

_FMT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DEFAULT_LEVEL = logging.WARNING


# ------------------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------------------


def _resolve_level(level: Union[int, str]) -> int:
    """Accept either a logging constant or a level name such as ``"info"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else _DEFAULT_LEVEL


def _init_file_handler(
    logs_dir: Path, logger_name: str, fmt: logging.Formatter
) -> Optional[logging.Handler]:
    """
    Create a timestamped FileHandler if directory is writable.
    Falls back to console logging if not.
    """
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        file_path = logs_dir / f"{logger_name}_{timestamp}.log"

        fh = logging.FileHandler(file_path, encoding="utf-8")
        fh.setFormatter(fmt)
        return fh
    except PermissionError:
        logging.getLogger().warning("Cannot write logs to %s", logs_dir)
        return None


# ------------------------------------------------------------------------------
# Public factory
# ------------------------------------------------------------------------------


def setup_logger(
    name: str,
    level: Union[int, str] = _DEFAULT_LEVEL,
    logs_dir: Union[str, Path, None] = None,
) -> logging.Logger:
    """
    Return a configured `logging.Logger`.

    Parameters
    ----------
    name : str
        Logger name (used in file naming).
    level : int | str
        Logging level or level name (WARNING by default).
    logs_dir : str | Path | None
        Directory for a log file; console only when omitted.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    # Clear existing handlers for idempotency
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(_FMT)

    # Console handler
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    # File handler
    if logs_dir:
        file_handler = _init_file_handler(Path(logs_dir), name, formatter)
        if file_handler:
            logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Return the module logger for library code.

    Library modules only attach to the ``pgncheck`` hierarchy; handlers are
    installed by the entry points through :func:`setup_logger`.
    """
    return logging.getLogger(f"pgncheck.{name}")
