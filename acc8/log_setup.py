"""
ACC8 logging setup: one logger tree for the emulator and its tools.

Console output goes through rich's RichHandler; an optional log file
captures everything at DEBUG with caller information.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"


def setup_logging(
    name: str = "acc8",
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """
    Configure and return a logger.

    Calling it again for the same name replaces the handlers of the
    previous call, so the latest levels and log file apply. Console
    messages go to stderr so they never mix with the machine report on
    stdout.
    """
    logger = logging.getLogger(name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(fh)

    # ── Console handler: only important stuff (WARNING+ default) ──
    if rich_console:
        ch = RichHandler(
            console=Console(stderr=True),
            level=console_level,
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    ch.setLevel(console_level)
    logger.addHandler(ch)

    logger.debug("Logger initialized: %s (console level %s)",
                 name, logging.getLevelName(console_level))
    return logger
