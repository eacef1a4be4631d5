"""
Configuration management for Tunebox
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

DEFAULT_ALLOWED_MIME_TYPES = ["audio/mpeg", "audio/wav", "audio/ogg", "audio/mp3"]


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )


@dataclass
class StorageConfig:
    """Configuration for uploaded file storage."""

    upload_dir: Optional[str] = None  # Default: <data dir>/uploads
    max_upload_mb: int = 50
    allowed_mime_types: List[str] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES)
    )
    chunk_size: int = 64 * 1024  # Bytes per streamed chunk
    extract_duration: bool = True

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    def resolve_upload_dir(self) -> Path:
        """Get the upload directory, falling back to the data directory."""
        if self.upload_dir:
            return Path(self.upload_dir).expanduser()
        return get_data_dir() / "uploads"

    def validate(self) -> None:
        """Validate storage configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.max_upload_mb <= 0:
            raise ValueError(f"max_upload_mb must be positive, got {self.max_upload_mb}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if not self.allowed_mime_types:
            raise ValueError("allowed_mime_types must not be empty")


@dataclass
class PlayerConfig:
    """Configuration for the playback controller."""

    volume: int = 75
    autoplay_on_advance: bool = True
    base_url: str = "http://127.0.0.1:8000"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: ~/.local/share/tunebox/tunebox.log
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunebox"
    return Path.home() / ".config" / "tunebox"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunebox"
    return Path.home() / ".local" / "share" / "tunebox"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. TUNEBOX_CONFIG environment variable
    2. Current working directory
    3. XDG_CONFIG_HOME/tunebox (or ~/.config/tunebox)
    """
    env_config = os.environ.get("TUNEBOX_CONFIG")
    if env_config:
        return Path(env_config).expanduser()

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Tunebox Configuration

[server]
host = "127.0.0.1"
port = 8000

# Restart the server when source files change (development only)
reload = false

# Origins allowed to call the API from a browser
allowed_origins = ["http://localhost:5173"]

[storage]
# Directory for uploaded audio (default: ~/.local/share/tunebox/uploads)
# upload_dir = "/srv/tunebox/uploads"

# Maximum upload size in MB
max_upload_mb = 50

# Accepted upload MIME types
allowed_mime_types = ["audio/mpeg", "audio/wav", "audio/ogg", "audio/mp3"]

# Bytes read per chunk when streaming
chunk_size = 65536

# Read track duration from file metadata on upload
extract_duration = true

[player]
# Initial volume (0-100)
volume = 75

# Start the next track automatically when one ends
autoplay_on_advance = true

# Server the player streams from
base_url = "http://127.0.0.1:8000"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/tunebox/tunebox.log)
# log_file = "/path/to/custom/tunebox.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false
""".strip()


def _apply_env_overrides(config: Config) -> None:
    upload_dir = os.environ.get("TUNEBOX_UPLOAD_DIR")
    if upload_dir:
        config.storage.upload_dir = upload_dir

    log_level = os.environ.get("TUNEBOX_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    origins = os.environ.get("ALLOWED_ORIGINS")
    if origins:
        config.server.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, keeping defaults for missing keys.

    Raises:
        ValueError: If a section contains invalid values
    """
    config = Config()

    if "server" in toml_data:
        server_data = toml_data["server"]
        config.server = ServerConfig(
            host=server_data.get("host", config.server.host),
            port=int(server_data.get("port", config.server.port)),
            reload=server_data.get("reload", config.server.reload),
            allowed_origins=server_data.get(
                "allowed_origins", config.server.allowed_origins
            ),
        )

    if "storage" in toml_data:
        storage_data = toml_data["storage"]
        config.storage = StorageConfig(
            upload_dir=storage_data.get("upload_dir"),
            max_upload_mb=storage_data.get(
                "max_upload_mb", config.storage.max_upload_mb
            ),
            allowed_mime_types=storage_data.get(
                "allowed_mime_types", config.storage.allowed_mime_types
            ),
            chunk_size=storage_data.get("chunk_size", config.storage.chunk_size),
            extract_duration=storage_data.get(
                "extract_duration", config.storage.extract_duration
            ),
        )
        config.storage.validate()

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            volume=player_data.get("volume", config.player.volume),
            autoplay_on_advance=player_data.get(
                "autoplay_on_advance", config.player.autoplay_on_advance
            ),
            base_url=player_data.get("base_url", config.player.base_url),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=logging_data.get("log_file"),
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, or defaults if no file exists.

    Environment variables override TOML values:
    - TUNEBOX_UPLOAD_DIR
    - TUNEBOX_LOG_LEVEL
    - ALLOWED_ORIGINS (comma-separated)
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    path = config_path or get_config_path()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        config = Config()
    else:
        try:
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e
        config = parse_config(toml_data)
        logger.debug(f"Loaded configuration from {path}")

    _apply_env_overrides(config)
    return config


def write_default_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file if one does not exist yet."""
    path = config_path or (get_config_dir() / "config.toml")
    if path.exists():
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(create_default_config())
    return path


def ensure_directories(config: Config) -> None:
    """Ensure the upload and data directories exist."""
    get_data_dir().mkdir(parents=True, exist_ok=True)
    config.storage.resolve_upload_dir().mkdir(parents=True, exist_ok=True)
