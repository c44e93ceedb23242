"""Logging setup for the Job Board backend."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stdout at the given level."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger("jobboard")
    root.setLevel(level.upper())
    root.handlers.clear()  # Avoid duplicate handlers on app reload
    root.addHandler(handler)
    root.propagate = False
