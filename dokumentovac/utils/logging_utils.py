"""Logging setup for dokumentovac.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and the entry points call ``setup_logging()`` once. Output goes to a rotating
file in the config dir instead of the console so the Textual UI is not
disturbed.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config.constants import LOG_BACKUP_COUNT, LOG_FILE_NAME, MAX_LOG_BYTES
from ..config.settings import get_config_dir, get_env_var

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_path() -> Path:
    return get_config_dir() / LOG_FILE_NAME


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure the ``dokumentovac`` logger hierarchy.

    The root logger is left alone so third-party libraries (httpx, textual)
    keep their own defaults. Calling this twice does not add a second handler.

    Args:
        verbose: Log at DEBUG instead of the configured level
        log_file: Override the log file location

    Returns:
        The package logger
    """
    logger = logging.getLogger("dokumentovac")

    level_name = "DEBUG" if verbose else (get_env_var("DOKUMENTOVAC_LOG_LEVEL") or "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    logger.setLevel(level)

    if any(getattr(h, "_dokumentovac", False) for h in logger.handlers):
        return logger

    path = log_file or get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
        )
    except OSError:
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._dokumentovac = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.debug("Logging to %s at %s", path, logging.getLevelName(level))

    return logger
