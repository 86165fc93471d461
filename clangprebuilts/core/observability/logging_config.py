"""
Logging setup for the clangprebuilts CLI.

Library code only ever does ``logger = logging.getLogger(__name__)``;
handlers are installed here, once, by main.py.

Console level precedence:
    --debug / --verbose / --quiet  >  CLANGPREBUILTS_LOG_LEVEL  >  WARNING

CLANGPREBUILTS_LOG_FILE adds a file handler, optionally at its own
level (CLANGPREBUILTS_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LOG_LEVEL = "CLANGPREBUILTS_LOG_LEVEL"
ENV_LOG_FILE = "CLANGPREBUILTS_LOG_FILE"
ENV_LOG_FILE_LEVEL = "CLANGPREBUILTS_LOG_FILE_LEVEL"

# Console format per threshold; the first entry the level reaches wins.
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Kept at WARNING unless running at DEBUG.
_NOISY_LOGGERS = ("yaml",)


def cli_log_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    environ = os.environ if environ is None else environ
    return environ.get(ENV_LOG_LEVEL) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install console (and optional file) handlers on the root logger.

    Args:
        level: Console level name.
        log_file: Path of an extra log file, if any.
        log_file_level: Level for the file; defaults to ``level``.
        quiet_third_party: Hold noisy third-party loggers at WARNING
            when not debugging.
    """
    console_level = _parse_level(level)

    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if console_level <= threshold:
            break

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to number; anything unrecognised means WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
