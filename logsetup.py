"""Centralized logging configuration for pathtrace."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "pathtrace"

# Flag to track if we've already set up the root logger
_ROOT_LOGGER_CONFIGURED = False

# Top-level packages whose module loggers should share our handler
_PACKAGES = ("graph", "algorithms", "playback", "ui", "assistant")


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the pathtrace loggers with a single handler.

    Safe to call more than once; only the first call has an effect.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to StreamHandler on stdout).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # module loggers use __name__, so hook each top-level package too
    for name in _PACKAGES:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(level)
        pkg_logger.handlers.clear()
        pkg_logger.addHandler(handler)
        # keep propagating so pytest's caplog still sees records
        pkg_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Logger under the pathtrace root, e.g. get_logger("web") → "pathtrace.web"."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
