"""Process logging for the officeauth service.

Modules log through ``logging.getLogger(__name__)``; this module only sets
up where records go and at which level the ``officeauth`` tree emits them.
"""

import logging
import sys

from officeauth.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Chatty third-party loggers held at WARNING unless debugging.
QUIET_LOGGERS = ("sqlalchemy.engine", "asyncpg", "multipart")


def setup_logging(debug: bool | None = None) -> None:
    """Send log records to stdout and set the service log level.

    ``debug`` defaults to ``settings.debug``. The root handler is only
    installed once; calling again just adjusts levels.
    """
    if debug is None:
        debug = get_settings().debug
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("officeauth").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
