"""
Playback controller - single-session state machine over a media resource.

User commands are synchronous. Media resource notifications arrive as events
(posted from any thread, consumed one at a time on the caller's thread); an
event whose track id is not the selected track belongs to a superseded load
and is dropped.
"""

import queue
from typing import Any, Optional, Sequence

from loguru import logger

from tunebox.domain.catalog.metadata import format_duration
from tunebox.domain.catalog.models import Track

from . import navigation
from .events import (
    DurationKnown,
    Ended,
    Failed,
    MediaEvent,
    MediaResource,
    MediaResourceError,
    PositionUpdate,
    Ready,
)
from .session import PlaybackSession, PlayerStatus, clamp_percent, clamp_volume

STREAM_PATH = "/api/tracks/{track_id}/stream"


def stream_url(base_url: str, track_id: str) -> str:
    """Build the range-serving endpoint URL for a track."""
    return base_url.rstrip("/") + STREAM_PATH.format(track_id=track_id)


class PlaybackController:
    """Owns one PlaybackSession and drives one MediaResource.

    Args:
        media: Media resource to command
        playlist: Ordered tracks used by next/previous
        base_url: Server root the stream URLs are built from
        volume: Initial volume (0-100)
        autoplay_on_advance: Start the next track once ready after one ends
    """

    def __init__(
        self,
        media: MediaResource,
        playlist: Sequence[Track] = (),
        base_url: str = "",
        volume: int = 75,
        autoplay_on_advance: bool = True,
    ) -> None:
        self.media = media
        self.playlist: Sequence[Track] = list(playlist)
        self.base_url = base_url
        self.autoplay_on_advance = autoplay_on_advance
        self.session = PlaybackSession()
        self._events: "queue.Queue[MediaEvent]" = queue.Queue()
        self.set_volume(volume)

    @property
    def status(self) -> PlayerStatus:
        return self.session.status

    def set_playlist(self, tracks: Sequence[Track]) -> None:
        self.playlist = list(tracks)

    # Commands

    def select_track(self, track: Track) -> None:
        """Select a track and start loading it. Supersedes any pending load."""
        previous = self.session.track_id
        self.session.reset_for(track)
        url = stream_url(self.base_url, track.id)
        logger.debug(f"Loading track {track.id} (was {previous}): {url}")
        self.media.load(url)

    def toggle_play_pause(self) -> None:
        session = self.session
        if session.status in (PlayerStatus.IDLE, PlayerStatus.ERROR):
            return

        # An explicit toggle replaces any pending autoplay
        session.play_when_ready = False

        if session.is_playing:
            self.media.pause()
            session.is_playing = False
            return

        self._play()

    def seek(self, percent: float) -> None:
        """Jump to a percentage (clamped to 0-100) of the known duration."""
        session = self.session
        if session.track is None or session.duration <= 0:
            return

        position = clamp_percent(percent) / 100 * session.duration
        self.media.seek(position)
        session.position = position

    def set_volume(self, value: float) -> None:
        volume = clamp_volume(value)
        self.session.volume = volume
        self.media.set_volume(volume / 100)

    def next_track(self) -> Optional[Track]:
        """Select the following playlist track. Returns it, or None if nothing changed."""
        current_id = self.session.track_id
        if current_id is None:
            return None
        track = navigation.next_track(self.playlist, current_id)
        if track is not None:
            self.select_track(track)
        return track

    def previous_track(self) -> Optional[Track]:
        current_id = self.session.track_id
        if current_id is None:
            return None
        track = navigation.previous_track(self.playlist, current_id)
        if track is not None:
            self.select_track(track)
        return track

    # Events

    def post(self, event: MediaEvent) -> None:
        """Queue a media event. Safe to call from media callback threads."""
        self._events.put(event)

    def process_pending(self) -> int:
        """Dispatch all queued events in arrival order. Returns how many were taken."""
        count = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return count
            self.dispatch(event)
            count += 1

    def dispatch(self, event: MediaEvent) -> bool:
        """Apply one event. Returns False if it was discarded as stale."""
        session = self.session
        if session.track is None or event.track_id != session.track.id:
            logger.debug(
                f"Dropping {type(event).__name__} for {event.track_id}, "
                f"selected is {session.track_id}"
            )
            return False

        if isinstance(event, Ready):
            self._on_ready()
        elif isinstance(event, DurationKnown):
            session.duration = max(0.0, event.duration)
        elif isinstance(event, PositionUpdate):
            session.position = max(0.0, event.position)
        elif isinstance(event, Ended):
            self._on_ended()
        elif isinstance(event, Failed):
            self._on_failed(event.message)
        return True

    def snapshot(self) -> dict[str, Any]:
        """Current state for display."""
        session = self.session
        return {
            "current_track": session.track,
            "status": session.status.value,
            "is_playing": session.is_playing,
            "current_time": session.position,
            "duration": session.duration,
            "duration_display": format_duration(session.duration),
            "volume": session.volume,
            "is_loading": session.is_loading,
            "progress": session.progress,
            "error": session.error,
        }

    def _play(self) -> bool:
        session = self.session
        session.is_playing = True
        try:
            self.media.play()
        except MediaResourceError as e:
            logger.warning(f"Play rejected for track {session.track_id}: {e}")
            session.is_playing = False
            return False
        return True

    def _on_ready(self) -> None:
        session = self.session
        session.is_loading = False
        if session.play_when_ready:
            session.play_when_ready = False
            self._play()

    def _on_ended(self) -> None:
        session = self.session
        if not session.is_playing:
            return

        session.is_playing = False
        ended_id = session.track_id
        advanced = self.next_track()

        if advanced is not None and self.autoplay_on_advance:
            session.play_when_ready = True
        logger.debug(
            f"Track {ended_id} ended, advanced to {advanced.id if advanced else None}"
        )

    def _on_failed(self, message: str) -> None:
        session = self.session
        logger.warning(f"Media error on track {session.track_id}: {message}")
        session.error = message
        session.is_loading = False
        session.is_playing = False
        session.play_when_ready = False
