# ==============================================================================
# conftest.py  –  Shared fixtures
# ==============================================================================

import logging

import pytest

CLI_LOGGERS = ("pgncheck", "pgncheck.batch")


@pytest.fixture(autouse=True)
def reset_cli_loggers():
    """Drop handlers installed by entry points (they hold captured streams)."""
    yield
    for name in CLI_LOGGERS:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
