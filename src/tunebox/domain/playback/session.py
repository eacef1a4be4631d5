"""Playback session state for one client."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tunebox.domain.catalog.models import Track

MIN_VOLUME = 0
MAX_VOLUME = 100


class PlayerStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PAUSED = "paused"
    PLAYING = "playing"
    ERROR = "error"


def clamp_volume(value: float) -> int:
    """Clamp a volume to the 0-100 integer range."""
    return int(round(max(MIN_VOLUME, min(MAX_VOLUME, value))))


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


@dataclass
class PlaybackSession:
    """Mutable transport state, owned and mutated only by PlaybackController.

    duration is 0.0 until the media resource reports it.
    """

    track: Optional[Track] = None
    is_playing: bool = False
    position: float = 0.0
    duration: float = 0.0
    volume: int = 75
    is_loading: bool = False
    error: Optional[str] = None
    play_when_ready: bool = False  # Start as soon as the pending load is ready

    @property
    def track_id(self) -> Optional[str]:
        return self.track.id if self.track else None

    @property
    def status(self) -> PlayerStatus:
        if self.track is None:
            return PlayerStatus.IDLE
        if self.error is not None:
            return PlayerStatus.ERROR
        if self.is_playing:
            return PlayerStatus.PLAYING
        if self.is_loading:
            return PlayerStatus.LOADING
        return PlayerStatus.PAUSED

    @property
    def progress(self) -> float:
        """Position as a percentage of duration (0 when duration is unknown)."""
        if self.duration <= 0:
            return 0.0
        return min(100.0, (self.position / self.duration) * 100)

    def reset_for(self, track: Track) -> None:
        """Start a fresh session for a newly selected track."""
        self.track = track
        self.is_playing = False
        self.position = 0.0
        self.duration = 0.0
        self.is_loading = True
        self.error = None
        self.play_when_ready = False
