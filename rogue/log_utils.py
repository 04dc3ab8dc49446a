"""
Logging setup for the command-line tools.

Library modules only create loggers; configuring handlers is left to whoever
runs them.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

# Overrides the level passed to setup_logging when set, e.g. ROGUE_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "ROGUE_LOG_LEVEL"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> None:
    """Configures the root logger with a console handler and an optional file handler."""
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
        except OSError as e:
            logging.getLogger(__name__).error("Could not open log file %s: %s", log_file, e)
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.getLogger(__name__).info("Logging to file: %s", log_file)
