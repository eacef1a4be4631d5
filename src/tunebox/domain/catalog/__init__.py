"""Catalog domain - track records and stored audio bytes.

This domain handles:
- Track metadata records (create, list, delete)
- Writing uploads to disk and windowed reads for streaming
- Optional duration extraction on upload
"""

from .catalog import TrackCatalog
from .exceptions import (
    RangeNotSatisfiableError,
    StorageError,
    StoredFileMissingError,
    TrackNotFoundError,
    TuneboxError,
    UnsupportedMediaTypeError,
    UploadTooLargeError,
    ValidationError,
)
from .metadata import DurationProbe, format_duration, get_duration_probe, probe_duration
from .models import ByteRange, StoredFile, Track, TrackCreate
from .storage import FileStore

__all__ = [
    "TrackCatalog",
    "FileStore",
    # Models
    "ByteRange",
    "StoredFile",
    "Track",
    "TrackCreate",
    # Metadata
    "DurationProbe",
    "format_duration",
    "get_duration_probe",
    "probe_duration",
    # Exceptions
    "RangeNotSatisfiableError",
    "StorageError",
    "StoredFileMissingError",
    "TrackNotFoundError",
    "TuneboxError",
    "UnsupportedMediaTypeError",
    "UploadTooLargeError",
    "ValidationError",
]
