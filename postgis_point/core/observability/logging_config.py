"""
Logging configuration — one call at CLI start, inherited by every module.

Modules only do ``logger = logging.getLogger(__name__)``; handlers and
levels are decided here.

Console level, first match wins:

    --debug → DEBUG     --verbose → INFO     --quiet → ERROR
    PPG_LOG_LEVEL
    WARNING

A log file is added when PPG_LOG_FILE is set; PPG_LOG_FILE_LEVEL gives it
its own level (default: the console level).  Wizard prompts and result
summaries are printed by click on stdout, so log records go to stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LOG_LEVEL = "PPG_LOG_LEVEL"
ENV_LOG_FILE = "PPG_LOG_FILE"
ENV_LOG_FILE_LEVEL = "PPG_LOG_FILE_LEVEL"

DEFAULT_LEVEL = "WARNING"

# Console format per threshold; above INFO only the message is shown
_CONSOLE_FORMATS: tuple[tuple[int, str, str], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Library loggers kept at WARNING unless --debug
_NOISY_LOGGERS = ("yaml",)


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value.

    Unknown or empty names fall back to WARNING.
    """
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def resolve_level(
    *,
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
    return env.get(ENV_LOG_LEVEL) or DEFAULT_LEVEL


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
            break
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level name for the file; defaults to ``level``.
        quiet_third_party: Hold library loggers at WARNING unless the
            console runs at DEBUG.
    """
    console_level = parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_cli_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """``setup_logging`` driven by CLI flags and the PPG_* environment."""
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
        quiet_third_party=not debug,
    )
