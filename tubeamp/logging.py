"""Logging configuration for tubeamp.

Provides two logging modes:
- Default: WARNING level only (quiet)
- Debug tracing: DEBUG level with flush, shows every field write and the
  recompute steps it triggers

Usage:
    from tubeamp.logging import logger, enable_debug_logging

    # Default - only warnings
    logger.warning("This will show")
    logger.debug("This won't show")

    # Trace the operating point engine
    enable_debug_logging()
"""

import logging
import sys

logger = logging.getLogger("tubeamp")

# Default: WARNING level only (quiet operation)
logger.setLevel(logging.WARNING)

if not logger.handlers:
    _default_handler = logging.StreamHandler(sys.stdout)
    _default_handler.setLevel(logging.WARNING)
    _default_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_default_handler)


class FlushingHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def enable_debug_logging():
    """Enable DEBUG level logging with immediate flush.

    Useful when following how a single field write propagates through
    the operating point engine.
    """
    logger.setLevel(logging.DEBUG)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = FlushingHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)

