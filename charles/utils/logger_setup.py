"""
Logging setup for evolution runs.

The engine only emits through ``loguru.logger``; call :func:`setup_logger`
once from the application to decide where those records go.
"""

from __future__ import annotations

from datetime import datetime, timezone
import os
import sys

from loguru import logger

PLAIN_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
COLOR_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<blue>{function}</blue>:<yellow>{line}</yellow> | "
    "<level>{message}</level>"
)


def setup_logger(
    log_dir: str | None = "logs",
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
    enable_colors: bool = True,
    run_name: str = "evolution",
) -> str | None:
    """
    Replace loguru's sinks with a console sink and, optionally, a file sink.

    Args:
        log_dir: Directory for log files; None logs to the console only
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation policy (e.g., "50 MB", "1 day")
        retention: Log retention policy (e.g., "30 days", "1 month")
        enable_colors: Whether to color console output on a TTY
        run_name: Prefix of the log file name

    Returns:
        Path to the log file, or None without a file sink
    """
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    logger.add(
        sys.stderr,
        level=level,
        format=COLOR_FORMAT if colorize else PLAIN_FORMAT,
        colorize=colorize,
        backtrace=True,
        diagnose=False,
    )

    if log_dir is None:
        logger.debug("Console logging at level {}", level)
        return None

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"{run_name}_{timestamp}.log")

    logger.add(
        log_file,
        level=level,
        format=PLAIN_FORMAT,
        rotation=rotation,
        retention=retention,
        compression="zip",
        encoding="utf-8",
        backtrace=True,
        diagnose=False,
    )

    logger.info("Logging to console and {}", log_file)
    return log_file
