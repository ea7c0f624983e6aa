"""Logging setup for the doke CLI.

Library modules never install handlers; they only ask for a logger:
    import logging
    log = logging.getLogger(__name__)

The CLI entry point calls configure_logging() once. DOKEDEX_LOG_LEVEL picks
the threshold (DEBUG shows registry changes and dropped frontmatter values,
the default INFO shows warnings about ignored settings). --quiet lowers
output to errors only.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "dokedex"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _env_level() -> int:
    name = os.environ.get("DOKEDEX_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def configure_logging() -> None:
    """Attach a stderr handler to the dokedex logger. Repeat calls do nothing."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _apply_level(logger, _env_level())


def set_quiet_mode(quiet: bool) -> None:
    """Only let errors through when quiet is set, restore the env level otherwise."""
    _apply_level(logging.getLogger(PACKAGE_LOGGER), logging.ERROR if quiet else _env_level())
