#!/usr/bin/env python3
"""
Logging utilities for Season Organizer
Provides colored console logging, per-run log files and log rotation.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


LOGGER_NAME = 'SeasonOrganizer'
LOG_FILE_PREFIX = 'season_organizer_'


# ANSI color codes for terminal output
class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels"""
    COLORS = {
        'DEBUG': Colors.BLUE,
        'INFO': Colors.GREEN,
        'WARNING': Colors.YELLOW,
        'ERROR': Colors.RED,
        'CRITICAL': Colors.RED + Colors.BOLD
    }

    def format(self, record):
        # Work on a copy so the file handler does not see the escape codes
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, Colors.RESET)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        return super().format(record)


def get_logger() -> logging.Logger:
    """Return the shared organizer logger (unconfigured until setup_logging runs)"""
    return logging.getLogger(LOGGER_NAME)


def new_log_file(log_dir: Path) -> Path:
    """
    Create the log directory and return a timestamped log file path inside it
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"


def cleanup_old_logs(log_dir: Path, keep_count: int = 10) -> int:
    """
    Delete old log files, keeping only the most recent ones

    Args:
        log_dir: Directory holding the log files
        keep_count: Number of most recent files to keep

    Returns:
        Number of deleted files
    """
    log_files = sorted(
        log_dir.glob(f"{LOG_FILE_PREFIX}*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    deleted = 0
    for old_log in log_files[keep_count:]:
        try:
            old_log.unlink()
            deleted += 1
        except OSError:
            # Might still be open by another run
            continue
    return deleted


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """
    Setup colored logging with an optional file handler

    Args:
        log_file: Path to the log file, None to log to the console only
        verbose: If True, enable DEBUG level logging on the console

    Returns:
        Configured logger instance
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    # Console handler with colored output
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredFormatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file is not None:
        # File handler with detailed formatting (no ANSI colors)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger
