from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tunebox.domain.catalog import Track


class TrackResponse(BaseModel):
    """Public track record. The storage location is never exposed."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    filename: str
    original_name: str
    file_size: int
    duration: Optional[float] = None
    mime_type: str

    @classmethod
    def from_track(cls, track: Track) -> "TrackResponse":
        return cls(
            id=track.id,
            filename=track.filename,
            original_name=track.original_name,
            file_size=track.file_size,
            duration=track.duration,
            mime_type=track.mime_type,
        )


class MessageResponse(BaseModel):
    message: str
