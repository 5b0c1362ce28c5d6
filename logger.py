"""Logging setup for the voucher API."""
import logging
import sys
from typing import Optional

import config

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(name: str = "", level: Optional[str] = None) -> logging.Logger:
    """Attach a stderr handler to `name` (root by default) once and set its level."""
    log = logging.getLogger(name)
    log.setLevel(level or config.log_level())
    if log.handlers:
        return log

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    log.addHandler(handler)
    return log
