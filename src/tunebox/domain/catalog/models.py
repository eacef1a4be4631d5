"""
Track catalog domain models.

Contains data structures for stored audio tracks and insert payloads.
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Track(NamedTuple):
    """Represents one stored audio asset with its catalog metadata.

    Tracks are created when an upload completes and are never mutated afterwards.
    Duration is None when it is unknown; it is never defaulted to zero.
    """

    id: str
    filename: str  # Stored file name inside the upload directory
    original_name: str  # Name the file had on the client
    file_size: int  # in bytes
    mime_type: str  # Declared MIME type, stored verbatim
    file_path: str  # Storage location
    duration: Optional[float] = None  # in seconds


class TrackCreate(BaseModel):
    """Insert payload for a new catalog record (every Track field except id)."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(min_length=1)
    original_name: str = Field(min_length=1)
    file_size: int = Field(ge=0)
    mime_type: str = Field(min_length=1)
    file_path: str = Field(min_length=1)
    duration: Optional[float] = Field(default=None, ge=0)

    @field_validator("filename", "original_name", "mime_type", "file_path")
    @classmethod
    def not_blank(cls, value: str) -> str:
        """Reject whitespace-only strings but store the value as given."""
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class StoredFile(NamedTuple):
    """Result of writing an upload to the file store."""

    filename: str
    path: str
    size: int


class ByteRange(NamedTuple):
    """Closed byte interval [start, end] within one file."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"
