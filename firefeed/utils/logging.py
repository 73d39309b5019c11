"""
Logging configuration for the firefeed pipeline.

Uses loguru. Scheduled runs usually want one JSON object per line
(LOG_JSON=true); interactive runs get the coloured console format.
"""

import os
import sys
from pathlib import Path

from loguru import logger

from firefeed.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    json_logs: bool | None = None,
    retention: str = "1 week",
) -> None:
    """
    Configure loguru sinks for a run.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file that receives a daily-rotated copy of the log
        json_logs: Serialize stderr records as JSON lines
        retention: How long rotated log files are kept
    """
    level = level or settings.pipeline.log_level
    log_file = log_file or settings.pipeline.log_file
    json_logs = settings.pipeline.log_json if json_logs is None else json_logs

    logger.remove()

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="00:00",
            retention=retention,
            compression="gz",
        )

    logger.debug(f"Logging configured: level={level} json={json_logs}")


# Only configure logging if not explicitly disabled
if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
