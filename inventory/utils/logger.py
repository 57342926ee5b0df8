"""
Logging setup - one stdout handler on the ``inventory`` logger.

Modules log through ``logging.getLogger(__name__)``; their records reach the
handler via the package logger, so storage, seeding and lifespan events all
share the same format whether the app runs under uvicorn or init_db.py.
"""
import logging
import sys

PACKAGE_LOGGER = "inventory"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach the stdout handler once and set the package level"""
    logger = logging.getLogger(PACKAGE_LOGGER)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger
