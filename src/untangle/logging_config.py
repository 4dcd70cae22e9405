"""
Logging for untangle.

Every module asks for a logger with get_logger(__name__), which lands under
the ``untangle`` namespace. The engine logs cycles and spectral fallbacks at
WARNING, phase summaries at INFO and per-edge detail (duplicate edges, the
eigenvalue spectrum) at DEBUG. Handlers are installed only by the entry
point through setup_logging(); importing the package configures nothing.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "untangle"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Send untangle's log records to stderr through rich.

    The default level is WARNING, so a normal run shows only cycles and
    numerical fallbacks. ``verbose`` adds the analysis phase summaries and
    duplicate-edge notices; ``quiet`` wins over ``verbose`` and keeps only
    errors.

    Args:
        verbose: Log at DEBUG
        quiet: Log at ERROR only
        log_file: Also append plain-text records to this file

    Returns:
        The ``untangle`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # Module names can contain brackets, so rich markup stays off.
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
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

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def setup_logging_for(verbosity: str, log_file: Optional[str] = None) -> logging.Logger:
    """setup_logging() driven by an AnalysisConfig.verbosity value."""
    return setup_logging(
        verbose=verbosity == "verbose", quiet=verbosity == "quiet", log_file=log_file
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for one untangle module.

    Args:
        name: Usually ``__name__``. Names outside the package are nested
            under ``untangle`` (``"planner"`` -> ``"untangle.planner"``).
            None returns the package logger itself.
    """
    if name is None:
        return logging.getLogger(_ROOT_LOGGER)

    if not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
