"""
Logging configuration for the favorites front end.

Provides console logging plus an optional rotating log file for the
Streamlit shell and the maintenance scripts.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def resolve_level(level: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as "debug" to its number; unknown names give default."""
    if not level:
        return default
    numeric_level = logging.getLevelName(level.strip().upper())
    return numeric_level if isinstance(numeric_level, int) else default


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> None:
    """
    Configure logging for the application.

    Args:
        log_file: Name of log file (default: None, logs to console only)
        level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR');
            unknown names fall back to INFO
        log_dir: Directory for log files (default: 'logs')
        max_bytes: Maximum size of log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
    """
    numeric_level = resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Replace whatever a previous run (or Streamlit rerun) installed
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        full_log_path = log_path / log_file

        file_handler = RotatingFileHandler(
            full_log_path,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        root_logger.info(f"Logging to file: {full_log_path}")

    if numeric_level != resolve_level(level, default=-1):
        root_logger.warning(f"Unknown log level {level!r}, using INFO")

    # Connection pool chatter
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Name of the logger (typically __name__)
        level: Optional logging level override

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(resolve_level(level))

    return logger


def configure_ui_logging(level: str = "INFO"):
    """
    Configure logging for the Streamlit shell.

    Args:
        level: Logging level name, usually from LOG_LEVEL (default: INFO)
    """
    setup_logging(
        log_file="ui.log",
        level=level,
        log_dir="logs"
    )


def configure_script_logging(debug: bool = False):
    """
    Configure console-only logging for command line scripts.

    Args:
        debug: Enable debug logging (default: False)
    """
    setup_logging(level="DEBUG" if debug else "INFO")
