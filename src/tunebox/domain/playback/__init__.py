"""Playback domain - client-side transport state machine.

This domain handles:
- The single playback session (track, play state, position, volume, loading)
- Commands to a passive media resource and the events it reports back
- Playlist navigation with wraparound
"""

from .controller import STREAM_PATH, PlaybackController, stream_url
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
from .navigation import next_track, previous_track, track_position
from .session import PlaybackSession, PlayerStatus, clamp_percent, clamp_volume

__all__ = [
    # Controller
    "PlaybackController",
    "STREAM_PATH",
    "stream_url",
    # Events
    "DurationKnown",
    "Ended",
    "Failed",
    "MediaEvent",
    "MediaResource",
    "MediaResourceError",
    "PositionUpdate",
    "Ready",
    # Navigation
    "next_track",
    "previous_track",
    "track_position",
    # Session
    "PlaybackSession",
    "PlayerStatus",
    "clamp_percent",
    "clamp_volume",
]
