"""Logging helpers shared by every cowcatalog module."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVEL_ENV = "COWCATALOG_LOG_LEVEL"

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the package root logger once.

    The level comes from the argument, then COWCATALOG_LOG_LEVEL, then INFO.
    Calling again only adjusts the level.
    """
    global _configured
    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    root = logging.getLogger("cowcatalog")
    root.setLevel(resolved)
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the cowcatalog namespace."""
    if not name.startswith("cowcatalog"):
        name = f"cowcatalog.{name}"
    return logging.getLogger(name)
