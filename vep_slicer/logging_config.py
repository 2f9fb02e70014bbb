"""
Centralized logging configuration for the slicing CLI.

Provides:
- Console handler on stderr (WARNING, or DEBUG when verbose), so log
  records never mix with sliced output on stdout
- Optional rotating file handler capturing all details (DEBUG level)
"""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# Module-level state
_logging_initialized = False
_log_file_path: Optional[str] = None


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[Path] = None,
    job_name: str = "vep_slicer",
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3
) -> Optional[str]:
    """
    Initialize logging with a console handler and an optional file handler.

    Args:
        verbose: Show DEBUG records on the console.
        log_dir: Directory for log files. No file logging if None.
        job_name: Name prefix for log file.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.

    Returns:
        Path to the log file, or None when logging to console only.
    """
    global _logging_initialized, _log_file_path

    # Avoid re-initialization
    if _logging_initialized:
        return _log_file_path

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, handlers filter
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"{job_name}_{timestamp}.log"
        _log_file_path = str(log_file)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        root_logger.addHandler(file_handler)

    _logging_initialized = True

    return _log_file_path


def reset_logging():
    """Reset logging state. Useful for testing."""
    global _logging_initialized, _log_file_path
    _logging_initialized = False
    _log_file_path = None

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
