# SPDX-License-Identifier: MIT
import logging, os, sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: str = None) -> logging.Logger:
    # stderr keeps stdout free for plan JSON
    lvl = (level or os.getenv("VAULTALLOC_LOG_LEVEL") or "INFO").upper()
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, lvl, logging.INFO))
    if logger.handlers:
        return logger
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(ch)
    logger.propagate = False
    return logger
