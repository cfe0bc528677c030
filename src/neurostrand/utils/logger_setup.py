"""
Logging setup for neurostrand.

The package logs through loguru and is disabled by default; applications call
'setup_logger()' to see its messages.
"""

import sys

from loguru import logger


def setup_logger(level: str = "INFO", log_file: str | None = None, enable_colors: bool = True) -> None:
    """
    Enable neurostrand logging with console and, optionally, file output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a log file to write to, in addition to the console
        enable_colors: Whether to enable colored console output
    """
    # Remove any existing handlers to avoid duplicates
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    if colorize:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<blue>{function}</blue>:<yellow>{line}</yellow> | "
            "<level>{message}</level>"
        )
    else:
        console_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

    logger.add(sys.stderr, level=level, format=console_format, colorize=colorize)

    if log_file is not None:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
            encoding="utf-8",
        )

    logger.enable("neurostrand")
    logger.debug("neurostrand logging enabled at level {}", level)
