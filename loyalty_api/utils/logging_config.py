"""
Logging setup for the Loyalty Points API.

All modules use ``logging.getLogger(__name__)``; this module only configures
the root handler once per process.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

# Libraries that are too chatty at INFO
NOISY_LOGGERS = ('sqlalchemy.engine', 'werkzeug', 'alembic.runtime.migration')

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL env var, then INFO.
    """
    global _configured

    level_name = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
