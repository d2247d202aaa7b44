"""
Application logging utilities.

Routes Python standard library logs for the ``lockin_scorer`` package to the
console, using rich output in dev mode and a plain stream handler otherwise.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for log levels
_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
    "log.time": "dim",
    "log.message": "default",
    "log.path": "dim",
})

# Shared console instance with custom theme
_console = Console(theme=_LOG_THEME, stderr=True)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Root logger name for the package
ROOT_LOGGER_NAME = 'lockin_scorer'

# Module-level cache for logger instances
_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: str = 'INFO',
    log_format: Optional[str] = None,
    include_console: bool = True,
    rich_tracebacks: bool = True,
    show_path: bool = True,
    show_time: bool = True,
    dev_mode: bool = False,
) -> None:
    """
    Setup logging for the lockin_scorer package.

    Configures the root 'lockin_scorer' logger with a console handler
    (Rich in dev mode, standard stream handler otherwise).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom format string for the stream handler. If None, uses default format.
        include_console: Whether to log to console (default: True)
        rich_tracebacks: Whether to use rich for exception tracebacks (default: True)
        show_path: Whether to show file path in console logs (default: True)
        show_time: Whether to show timestamp in console logs (default: True)
        dev_mode: Whether to use rich console output (default: False)
    """
    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT

    level_value = getattr(logging, level.upper())

    handlers: list[logging.Handler] = []
    if include_console:
        if dev_mode:
            console_handler: logging.Handler = RichHandler(
                console=_console,
                level=level_value,
                show_time=show_time,
                show_path=show_path,
                rich_tracebacks=rich_tracebacks,
                markup=False,
            )
        else:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(log_format))
        console_handler.setLevel(level_value)
        handlers.append(console_handler)
    else:
        handlers.append(logging.NullHandler())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)
    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified component.

    The logger is a child of the 'lockin_scorer' root logger.

    Args:
        name: The name of the component (e.g., 'engine', 'server').
              Will be prefixed with 'lockin_scorer.' automatically.

    Returns:
        A logging.Logger instance

    Usage:
        from lockin_scorer.app_logging import get_logger

        logger = get_logger("engine")
        logger.info("Assessment complete")
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]


# Create root logger on module import with NullHandler
_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())
