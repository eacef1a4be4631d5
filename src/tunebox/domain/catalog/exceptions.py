"""Catalog and storage exceptions for error handling."""


class TuneboxError(Exception):
    """Base exception for catalog and storage operations."""

    pass


class TrackNotFoundError(TuneboxError):
    """Raised when a track id is not in the catalog."""

    def __init__(self, track_id: str, message: str = None):
        self.track_id = track_id
        super().__init__(message or "Track not found")


class StoredFileMissingError(TrackNotFoundError):
    """Raised when a track's metadata exists but its stored file does not."""

    def __init__(self, track_id: str = "", message: str = None):
        super().__init__(track_id, message or "Audio file not found")


class ValidationError(TuneboxError):
    """Raised when an upload or insert payload is rejected."""

    pass


class UnsupportedMediaTypeError(ValidationError):
    """Raised when an upload's declared MIME type is not allowed."""

    def __init__(self, mime_type: str, message: str = None):
        self.mime_type = mime_type
        super().__init__(
            message or "Unsupported file format. Please upload MP3, WAV, or OGG files."
        )


class UploadTooLargeError(ValidationError):
    """Raised when an upload exceeds the size limit."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        )


class StorageError(TuneboxError):
    """Raised when reading or writing stored bytes fails."""

    pass


class RangeNotSatisfiableError(TuneboxError):
    """Raised when a well-formed byte range lies outside the file."""

    def __init__(self, file_size: int, range_header: str):
        self.file_size = file_size
        self.range_header = range_header
        super().__init__(f"Range not satisfiable: {range_header} (size {file_size})")
