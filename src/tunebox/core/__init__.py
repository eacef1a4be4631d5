"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Storage path validation

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

from .config import (
    Config,
    LoggingConfig,
    PlayerConfig,
    ServerConfig,
    StorageConfig,
    create_default_config,
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    parse_config,
    write_default_config,
)
from .output import setup_logging_from_config, setup_loguru
from .path_security import is_path_within_root, validate_stored_path

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "PlayerConfig",
    "ServerConfig",
    "StorageConfig",
    "create_default_config",
    "ensure_directories",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "parse_config",
    "write_default_config",
    # Logging
    "setup_logging_from_config",
    "setup_loguru",
    # Path security
    "is_path_within_root",
    "validate_stored_path",
]
