"""
Logging configuration for semcmp.

Reports are written to stdout by the formatters, so log records go to
stderr through a rich handler and never mix into JSON or GitHub output.
The CLI maps `--verbose` and `--quiet` onto the level here.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route semcmp log records to stderr.

    Safe to call more than once (each CLI invocation does); earlier
    handlers are replaced.

    Args:
        verbose: DEBUG level, with timestamps, paths and traceback locals
        quiet: Only loader failures and other ERROR records
        log_file: Also append plain-text records to this file

    Returns:
        The "semcmp" logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger("semcmp")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name, usually ``__name__``; names outside the
              package are placed under "semcmp." so one level covers all.
              If None, returns the "semcmp" logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("semcmp")

    if not name.startswith("semcmp"):
        name = f"semcmp.{name}"

    return logging.getLogger(name)
