#!/usr/bin/env python3
"""
Logging configuration for the spindec build front-end.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(log_level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Set up logging configuration using loguru.

    Diagnostics go to stderr so that standard output only carries the
    banner, the compile line and status messages.

    Args:
        log_level: The logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file receiving DEBUG and above
    """
    # Remove default logger
    logger.remove()

    if log_level in ("DEBUG", "TRACE"):
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
    else:
        log_format = (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention=3,
        )

    logger.debug(f"Logging initialized at {log_level} level")
