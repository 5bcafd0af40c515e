"""Logging configuration.

Library modules log through ``logging.getLogger(__name__)``; the CLI calls
configure_logging once per invocation to route the ``ledgerbook`` logger
to stderr.

Environment variables:
- LEDGERBOOK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "LEDGERBOOK_LOG_LEVEL"
HANDLER_NAME = "ledgerbook-console"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling again replaces the handler, so it always writes to the
    current ``sys.stderr``.
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()

    logger = logging.getLogger("ledgerbook")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
