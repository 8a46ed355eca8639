# goalmech/logging_config.py
"""
Log output for scripts: the package itself only creates module loggers
(increment progress and caps in kernel.buckling, registration details in
kernel.solver) and leaves handlers to the caller.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route 'goalmech.*' records to stdout, and to log_file if given. Safe to call repeatedly."""
    logger = logging.getLogger("goalmech")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter("%(levelname)-7s %(name)s: %(message)s")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
