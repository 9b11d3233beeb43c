"""
Logging configuration for the Vibe Coding Profiler.

Engine modules only log through ``get_logger``; the CLI decides where
records go. ``setup_logging`` attaches its handlers to the ``vibe_profiler``
logger rather than the root logger, so an application embedding the engine
keeps its own logging setup. Records still propagate to the root logger.

Rich markup is disabled on the console handler: persona rule labels such as
``B in [40,60]`` appear in log messages and must print verbatim.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "vibe_profiler"

# Marks handlers installed here so a repeated setup replaces them
_HANDLER_TAG = "_vibe_profiler_handler"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install a rich stderr handler (and optionally a file handler) on the
    package logger.

    Calling it again, as each CLI invocation does, replaces the handlers
    from the previous call instead of stacking them.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging; wins over ``verbose``
        log_file: Optional file path to also write plain-text logs to

    Returns:
        The configured ``vibe_profiler`` logger
    """
    level = _level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
        log_time_format="[%X]",
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_TAG, True)
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger namespaced under ``vibe_profiler``.

    Args:
        name: Module name (e.g. ``__name__`` or ``"personas.engine"``).
              If None, returns the package root logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
