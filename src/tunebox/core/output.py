"""
Logging setup using Loguru.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def get_log_file_path() -> Path:
    """Get the path to the default log file."""
    return get_data_dir() / "tunebox.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    rotation_mb: int = 10,
    retention: int = 5,
    console_output: bool = False,
) -> Path:
    """
    Configure loguru with a rotating file sink and an optional stderr sink.

    Args:
        log_file: Path to log file (default: ~/.local/share/tunebox/tunebox.log)
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
        rotation_mb: Rotate the file once it reaches this size
        retention: Number of rotated files to keep
        console_output: Whether to also log to stderr

    Returns:
        The log file path in use
    """
    path = log_file if log_file else get_log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        path,
        rotation=f"{rotation_mb} MB",
        retention=retention,
        level=level.upper(),
        format=LOG_FORMAT,
        enqueue=True,  # Request handlers log from worker threads
    )

    if console_output:
        logger.add(sys.stderr, level=level.upper(), format="{level}: {message}")

    logger.info(f"Loguru initialized: {path} (level={level})")
    return path


def setup_logging_from_config(config: LoggingConfig) -> Path:
    """Configure loguru from the [logging] config section."""
    return setup_loguru(
        log_file=Path(config.log_file).expanduser() if config.log_file else None,
        level=config.level,
        rotation_mb=config.max_file_size_mb,
        retention=config.backup_count,
        console_output=config.console_output,
    )
