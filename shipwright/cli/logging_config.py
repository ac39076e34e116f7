# shipwright/cli/logging_config.py
"""Logging setup for the command line"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..config import Config
from ..constants import (
    APP_NAME,
    LOG_FORMAT,
    FILE_LOG_FORMAT,
    PROJECT_DIR,
    LOGS_DIR,
    LOG_FILE_PATTERN,
    DEFAULT_MAX_LOGS,
)


def setup_logging(console: Console, verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        console: Console the rich handler writes to
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_suppress=[click]
    )
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[handler]
    )


def attach_file_logging(project_root: Path, config: Config) -> Optional[Path]:
    """Write a log file for this run when ``general.logging`` is enabled

    Only the newest ``general.maxlogs`` log files are kept. A value below 1
    keeps just the file of this run.

    Returns:
        Path of the new log file, or None if file logging is disabled
    """
    if config.general("logging", False) is not True:
        return None

    logs_dir = Path(project_root) / PROJECT_DIR / LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / LOG_FILE_PATTERN.format(timestamp=timestamp)

    handler = logging.FileHandler(log_path)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))

    app_logger = logging.getLogger(APP_NAME)
    app_logger.setLevel(logging.DEBUG)
    app_logger.addHandler(handler)

    # The log of the current run is always kept
    max_logs = max(int(config.general("maxlogs", DEFAULT_MAX_LOGS)), 1)
    logs = sorted(logs_dir.glob("log-*.log"))
    for old_log in logs[:-max_logs]:
        old_log.unlink()

    return log_path
