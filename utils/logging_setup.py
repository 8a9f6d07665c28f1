"""
Logging Setup
Console (stderr) and optional file sinks for loguru
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Configure loguru sinks

    stdout stays free for script output; all log records go to stderr.

    Args:
        level: Console level (LOG_LEVEL env var, INFO if unset)
        log_file: Optional path of a rotating DEBUG log file
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level or os.getenv('LOG_LEVEL', 'INFO')
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
