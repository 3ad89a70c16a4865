"""Logging setup shared by all ekflow modules.

Every module obtains its logger through :func:`get_logger`; the loggers are
children of a single ``ekflow`` logger that owns the only handler. Records go
to stderr so that command output written to stdout (matrices, generated
network files) stays machine readable.

The initial level can be set with the ``EKFLOW_LOG_LEVEL`` environment
variable (a level name such as ``DEBUG`` or ``WARNING``).
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "ekflow"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "EKFLOW_LOG_LEVEL"

_configured = False


def _level_from_env(default: int) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    # getLevelName() returns a "Level X" string for unknown names
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single handler to the ``ekflow`` logger.

    Subsequent calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Level used when ``EKFLOW_LOG_LEVEL`` is not set.
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Handler to install; defaults to a stderr ``StreamHandler``.
    """
    global _configured
    if _configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(_level_from_env(level))

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees the records
    root_logger.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger that inherits level and handler from ``ekflow``.

    Args:
        name: Logger name, normally the caller's ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Change the level of the ``ekflow`` logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Show the per-augmentation DEBUG records of the solver (CLI ``--verbose``)."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Back to INFO, hiding the per-augmentation records again."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Forget the current configuration (used by tests)."""
    global _configured
    _configured = False
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
