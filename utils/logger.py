"""Project-wide logger"""

import logging
import sys

from config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "pdfflow", level: str = None) -> logging.Logger:
    """Create (or return) the named logger with a single stderr handler"""
    log = logging.getLogger(name)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)

    log.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))
    return log


logger = setup_logger()
