"""
Logging configuration for the admin console.

Provides one logging setup shared by the API client, the gateway service and
the launcher scripts.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Chatty third-party loggers that drown the console output at DEBUG
_NOISY_LOGGERS = ("urllib3", "werkzeug")


def setup_logging(
    component_name: str,
    level=logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
):
    """
    Configure logging for a console component.

    Args:
        component_name: Component identifier (e.g., 'console', 'client')
        level: Logging level, either an int or a name such as 'DEBUG'
        log_file: Optional file path for log output
        format_string: Custom format string (default provided)

    Returns:
        The component logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if format_string is None:
        format_string = f'[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(format_string, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)

    if level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(component_name)
    logger.info(f"{component_name.upper()} logging initialized (level={logging.getLevelName(level)})")

    return logger
