"""
Logging configuration — one-time setup for the CLI and embedding apps.

Every module does ``logger = logging.getLogger(__name__)``, so all of
orderroots logs under the ``orderroots`` logger. Setup attaches handlers
to the root logger but only lowers the level of the ``orderroots``
logger; other libraries stay at WARNING unless ``include_third_party``.

Anything not passed explicitly is read from the environment:

    ORDERROOTS_LOG_LEVEL        console level (default WARNING)
    ORDERROOTS_LOG_FILE         also write to this file
    ORDERROOTS_LOG_FILE_LEVEL   file level (default: console level)

CLI flags win over the environment (see ``level_from_flags``).
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LOG_LEVEL = "ORDERROOTS_LOG_LEVEL"
ENV_LOG_FILE = "ORDERROOTS_LOG_FILE"
ENV_LOG_FILE_LEVEL = "ORDERROOTS_LOG_FILE_LEVEL"

PACKAGE_LOGGER = "orderroots"

# (max level, format, datefmt) — first row whose level is >= the console level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Marks handlers we installed so a second setup replaces only those
_HANDLER_TAG = "_orderroots_handler"


def level_from_flags(verbose: bool = False, quiet: bool = False, debug: bool = False) -> str | None:
    """Console level implied by CLI flags, or None to defer to the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return None


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    include_third_party: bool = False,
) -> int:
    """Configure logging for the process.

    Args:
        level: Console level name. None reads ORDERROOTS_LOG_LEVEL.
        log_file: Extra log file. None reads ORDERROOTS_LOG_FILE.
        log_file_level: File level name. None reads ORDERROOTS_LOG_FILE_LEVEL,
            falling back to the console level.
        include_third_party: Apply the level to every logger, not just
            ``orderroots``.

    Returns:
        The effective numeric level of the ``orderroots`` logger.
    """
    console_level = parse_level(level or os.environ.get(ENV_LOG_LEVEL))
    log_file = log_file or os.environ.get(ENV_LOG_FILE)
    file_level_name = log_file_level or os.environ.get(ENV_LOG_FILE_LEVEL)
    file_level = parse_level(file_level_name) if file_level_name else console_level

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_console_handler(console_level))
    effective = console_level
    if log_file:
        root.addHandler(_file_handler(log_file, file_level))
        effective = min(effective, file_level)

    logging.getLogger(PACKAGE_LOGGER).setLevel(effective)
    root.setLevel(effective if include_third_party else max(effective, logging.WARNING))
    return effective


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for limit, f, d in _CONSOLE_FORMATS if level <= limit)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    setattr(handler, _HANDLER_TAG, True)
    return handler
