"""
HTTP client for the Tunebox track API.

Used on the player side to fetch the playlist (catalog listing order) and to
build stream URLs for the playback controller.
"""

from typing import Any

import requests
from loguru import logger

from tunebox.domain.catalog.models import Track
from tunebox.domain.playback.controller import stream_url


class ApiClientError(Exception):
    """Raised when the track API cannot be reached or answers with an error."""

    pass


def track_from_api(data: dict[str, Any]) -> Track:
    """Convert a camelCase API track record into a Track.

    The storage location is server-side only, so file_path is left blank.
    """
    return Track(
        id=data["id"],
        filename=data["filename"],
        original_name=data["originalName"],
        file_size=data["fileSize"],
        mime_type=data["mimeType"],
        file_path="",
        duration=data.get("duration"),
    )


class TrackApiClient:
    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def stream_url(self, track_id: str) -> str:
        return stream_url(self.base_url, track_id)

    def list_tracks(self) -> list[Track]:
        """Fetch all tracks in catalog order."""
        try:
            response = self.session.get(
                f"{self.base_url}/api/tracks", timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch tracks: {e}")
            raise ApiClientError(f"Failed to fetch tracks: {e}") from e

        return [track_from_api(item) for item in response.json()]

    def delete_track(self, track_id: str) -> bool:
        """Delete a track. Returns False if the server did not know it."""
        try:
            response = self.session.delete(
                f"{self.base_url}/api/tracks/{track_id}", timeout=self.timeout
            )
            if response.status_code == 404:
                return False
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to delete track {track_id}: {e}")
            raise ApiClientError(f"Failed to delete track {track_id}: {e}") from e

        return True
