"""
Logging configuration — one setup call for the CLI process.

Library code only ever does ``logger = logging.getLogger(__name__)``;
handlers are attached here, once, by the entrypoint.  Embedding
applications that configure logging themselves never call this.

Level precedence:
    --debug / --verbose / --quiet  >  UNINV_LOG_LEVEL  >  WARNING

File output is opt-in via UNINV_LOG_FILE (and UNINV_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "UNINV_LOG_LEVEL"
ENV_FILE = "UNINV_LOG_FILE"
ENV_FILE_LEVEL = "UNINV_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message is enough
_FMT_PLAIN = "%(message)s"

# INFO: which adapter said it, and when
_FMT_INFO = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output: full location
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(threadName)s: %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Worker-pool internals are chatty at DEBUG
_QUIET_LOGGERS = ("concurrent.futures",)


def resolve_level(
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
    env = os.environ if environ is None else environ
    return env.get(ENV_LEVEL) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file, always written in full detail.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DETAIL, _DATEFMT_CONSOLE
    elif console_level <= logging.INFO:
        fmt, datefmt = _FMT_INFO, _DATEFMT_CONSOLE
    else:
        fmt, datefmt = _FMT_PLAIN, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        root.addHandler(handler)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value, WARNING if unknown."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
