"""
In-memory track catalog.

One TrackCatalog instance is owned by the web application and handed to
request handlers through dependency injection, so tests get isolated catalogs.
"""

import threading
import uuid
from typing import Optional

import pydantic
from loguru import logger

from .exceptions import TrackNotFoundError, ValidationError
from .models import Track, TrackCreate


class TrackCatalog:
    """Mapping from track id to stored-file metadata.

    All mutations hold a lock, so concurrent deletes of the same id cannot
    both succeed. Listing order is insertion order.
    """

    def __init__(self) -> None:
        self._tracks: dict[str, Track] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tracks)

    def __contains__(self, track_id: object) -> bool:
        with self._lock:
            return track_id in self._tracks

    def list_tracks(self) -> list[Track]:
        """Get all tracks in the order they were created."""
        with self._lock:
            return list(self._tracks.values())

    def get_track(self, track_id: str) -> Optional[Track]:
        with self._lock:
            return self._tracks.get(track_id)

    def require_track(self, track_id: str) -> Track:
        """Get a track or raise TrackNotFoundError."""
        track = self.get_track(track_id)
        if track is None:
            raise TrackNotFoundError(track_id)
        return track

    def create_track(self, data: TrackCreate | dict) -> Track:
        """
        Insert a new track record.

        Args:
            data: Validated TrackCreate, or a raw dict to validate

        Returns:
            The created Track with a fresh id

        Raises:
            ValidationError: If a raw payload fails validation
        """
        if not isinstance(data, TrackCreate):
            try:
                data = TrackCreate.model_validate(data)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid track data: {e.errors()[0]['msg']}") from e

        track = Track(
            id=str(uuid.uuid4()),
            filename=data.filename,
            original_name=data.original_name,
            file_size=data.file_size,
            mime_type=data.mime_type,
            file_path=data.file_path,
            duration=data.duration,
        )
        with self._lock:
            self._tracks[track.id] = track

        logger.debug(f"Catalog: created track {track.id} ({track.original_name})")
        return track

    def delete_track(self, track_id: str) -> Optional[Track]:
        """
        Remove a track record.

        Returns:
            The removed Track, or None if no record had that id
        """
        with self._lock:
            track = self._tracks.pop(track_id, None)

        if track is not None:
            logger.debug(f"Catalog: deleted track {track_id}")
        return track
