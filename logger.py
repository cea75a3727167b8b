"""Logging configuration for Potti.

Application code logs through the "potti" logger. The ingestion package uses
module loggers (``logging.getLogger(__name__)``), so its records arrive under
"ingestion.*" and get the same handlers.
"""

import logging
from datetime import date
from typing import List

from config import Config

LOGGER_NAME = "potti"
INGESTION_LOGGER_NAME = "ingestion"


def _build_handlers(config: Config) -> List[logging.Handler]:
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")

    # One file per day: potti-{date}.log
    log_file_path = config.log_dir / f"potti-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)

    return [file_handler, console_handler]


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        The configured application logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)
    handlers = _build_handlers(config)

    for name in (LOGGER_NAME, INGESTION_LOGGER_NAME):
        configured = logging.getLogger(name)
        configured.setLevel(config.log_level)
        # setup_logging may be called more than once per process (tests, CLI)
        configured.handlers.clear()
        for handler in handlers:
            configured.addHandler(handler)

    return logging.getLogger(LOGGER_NAME)


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The potti logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
