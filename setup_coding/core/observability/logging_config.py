"""
Logging configuration for setup-coding runs.

``setup_logging`` is called once by the CLI before any probe or recipe
runs. Modules log through ``logging.getLogger(__name__)``:

    WARNING   failed steps, unreachable presence checks, fatal facts
    INFO      every probe, presence answer and spawned command (▶ ...)
    DEBUG     captured probe output, resolved pipelines, facts dump

Console level: ``--debug`` / ``--verbose`` / ``--quiet`` flag, else
SETUP_CODING_LOG_LEVEL, else WARNING. SETUP_CODING_LOG_FILE adds a file
log at SETUP_CODING_LOG_FILE_LEVEL (default: the console level), which
is the record to read after an unattended provisioning run.
"""

from __future__ import annotations

import logging
import sys

# Console formats, keyed by the most verbose level they serve.
# WARNING output sits right above the run summary, so it stays bare.
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

# The file log always records level and origin; it is read after the fact.
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for one provisioning run.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file, appended to.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    # stdout carries the run summary and --json output
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)

    root.setLevel(root_level)

    # A broken log stream must not abort an install halfway through.
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    for upto, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= upto:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; anything unrecognised means WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
