# src/samplemap/logging_setup.py
from __future__ import annotations
import logging
import os

LOG_LEVEL_ENV = "SAMPLEMAP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(default_level: str = "WARNING") -> int:
    """
    Sets up the root logger (stderr) from $SAMPLEMAP_LOG_LEVEL and returns the level.
    An unknown level name falls back to default_level with a warning.
    """
    name = os.environ.get(LOG_LEVEL_ENV, default_level).strip().upper()
    level = logging.getLevelName(name)
    bad = not isinstance(level, int)
    if bad:
        level = logging.getLevelName(default_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    if bad:
        logging.getLogger(__name__).warning(
            "Invalid %s %r; using %s", LOG_LEVEL_ENV, name, logging.getLevelName(level))
    return level
