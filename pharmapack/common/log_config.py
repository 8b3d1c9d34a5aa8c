"""
Logging Configuration

Console output goes to stderr so stdout stays clean for the verification
report. A full pass over the catalogue produces one DEBUG line per odd
descriptor, so that detail can be routed to a log file instead of the
console.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "pharmapack"
LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False,
                  log_file: Optional[str | Path] = None) -> None:
    """
    Configure the package logger.

    Args:
        verbose: If True, console level is DEBUG (per-record parse details)
        quiet: If True, console level is WARNING
        log_file: Optional path that receives every record at DEBUG,
            whatever the console level
    """
    console_level = _console_level(verbose, quiet)

    logger = logging.getLogger(PACKAGE_LOGGER)
    # Repeated calls replace the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s " + LOG_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)
