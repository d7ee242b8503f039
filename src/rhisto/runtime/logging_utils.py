"""
Run logging helpers.
"""

import logging
from pathlib import Path

from ..core.errors import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error")


def resolve_level(log_level):
    text = str(log_level or "warning").strip().lower()
    if text not in LOG_LEVELS:
        raise ConfigError(
            f"log level must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
        )
    return getattr(logging, text.upper())


def setup_run_logger(log_level="warning", log_file=None, name="rhisto"):
    level = resolve_level(log_level)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            try:
                handler.close()
            except Exception:
                pass

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    log_path = None
    text = str(log_file or "").strip()
    if text:
        resolved = Path(text).expanduser()
        resolved.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(resolved)
        file_handler.setLevel(min(level, logging.INFO))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        logger.addHandler(file_handler)
        log_path = str(resolved)

    return logger, log_path
