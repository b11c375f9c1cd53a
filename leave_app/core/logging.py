"""
Logging for the Leave Management backend

Application loggers live under the ``leave_app`` namespace and follow
LOG_LEVEL. Server and SQL loggers keep their own, quieter levels.
"""
import logging
import sys
from typing import Optional
from leave_app.core.config import settings

APP_LOGGER = "leave_app"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# SQL statement logging is too chatty for the leave request path
LIBRARY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure console logging; level overrides settings.LOG_LEVEL (scripts pass DEBUG)"""
    level_name = (level or settings.LOG_LEVEL).upper()
    app_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(APP_LOGGER).setLevel(app_level)
    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured: level=%s, env=%s, user directory=%s",
        level_name, settings.APP_ENV, settings.USER_DIRECTORY
    )
    if settings.USER_DIRECTORY == "demo" and settings.APP_ENV != "local":
        logger.warning("Demo user directory is active in %s", settings.APP_ENV)
