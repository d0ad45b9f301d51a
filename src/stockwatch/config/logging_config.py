"""Process-wide logging setup."""

import logging
import sys
from typing import Optional

from stockwatch.config.settings import get_settings

HANDLER_NAME = "stockwatch"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Third-party loggers capped at these levels
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "yfinance": logging.WARNING,
    "peewee": logging.WARNING,
    "urllib3": logging.WARNING,
    "uvicorn": logging.INFO,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Attach a stdout handler to the root logger and set its level.

    Safe to call more than once (each app startup calls it); the handler is
    only added the first time.
    """
    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(getattr(logging, level_name, logging.INFO))
    for name, cap in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)
