"""
Logging configuration for the EBSUtilX scripts.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = '[%(asctime)s] %(name)s %(levelname)s - %(message)s'

def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger and return the package logger.

    Args:
        level: Logging level, as a number or a name (DEBUG, INFO, ...)
        log_file: Optional file path for log output
        format_string: Custom format string (default provided)

    Returns:
        logging.Logger: The ``ebsutil`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S'))
        logging.getLogger().addHandler(file_handler)

    logger = logging.getLogger("ebsutil")
    logger.debug("Logging initialized (level=%s)", logging.getLevelName(level))
    return logger
