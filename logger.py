"""
Logging setup shared by the app and its modules.

Call setup_logger() once when the app is created; everything else just uses
logging.getLogger(__name__).
"""

import logging
import sys

from config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name=__name__, level=Config.LOG_LEVEL):
    """
    Configure root logging to stdout and return the logger called ``name``.

    ``level`` is a level name such as "debug" or "WARNING"; anything logging
    does not recognise falls back to INFO.
    """
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # SQL echo is controlled by SQLALCHEMY_ECHO, not by our level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger(name)
