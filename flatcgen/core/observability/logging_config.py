"""
Logging configuration — set up once by the CLI.

Library code only does ``logger = logging.getLogger(__name__)``; build
scripts that call the API directly keep whatever logging they already
have.

Levels are resolved in precedence order:
    CLI flag  >  FLATCGEN_LOG_LEVEL env var  >  WARNING (default)

Optional file output via FLATCGEN_LOG_FILE / FLATCGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LOG_LEVEL = "FLATCGEN_LOG_LEVEL"
ENV_LOG_FILE = "FLATCGEN_LOG_FILE"
ENV_LOG_FILE_LEVEL = "FLATCGEN_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

# Default console: bare messages, so flatc diagnostics read as flatc wrote them
_FMT_PLAIN = "%(message)s"

# -v: which part of flatcgen is talking
_FMT_TAGGED = "[%(name)s] %(message)s"

# --debug and the log file
_FMT_DETAILED = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, falling back to the env."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(ENV_LOG_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with flatcgen's.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file, always in the detailed format.
        log_file_level: Level for the log file. Defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(_parse_level(log_file_level) if log_file_level else console_level)
        file_handler.setFormatter(logging.Formatter(_FMT_DETAILED))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))

    # Errors raised inside handlers are reported, not propagated
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DETAILED, datefmt="%H:%M:%S")
    if level <= logging.INFO:
        return logging.Formatter(_FMT_TAGGED)
    return logging.Formatter(_FMT_PLAIN)


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
