"""
Media resource interface and the events it reports.

Every event carries the id of the track whose load produced it, so the
controller can drop events from a load that a newer selection superseded.
"""

from dataclasses import dataclass
from typing import Protocol, Union


class MediaResourceError(Exception):
    """Raised by a media resource that rejects a command (e.g. play before ready)."""

    pass


class MediaResource(Protocol):
    """Passive decoding/transport primitive driven by the playback controller."""

    def load(self, url: str) -> None: ...

    def play(self) -> None:
        """Start playback. Raises MediaResourceError if rejected."""
        ...

    def pause(self) -> None: ...

    def seek(self, seconds: float) -> None: ...

    def set_volume(self, level: float) -> None:
        """Set volume on a 0.0-1.0 scale."""
        ...


@dataclass(frozen=True)
class Ready:
    """Enough data is buffered to start playback."""

    track_id: str


@dataclass(frozen=True)
class DurationKnown:
    track_id: str
    duration: float


@dataclass(frozen=True)
class PositionUpdate:
    track_id: str
    position: float


@dataclass(frozen=True)
class Ended:
    track_id: str


@dataclass(frozen=True)
class Failed:
    """The media resource could not load or decode the track."""

    track_id: str
    message: str = "Playback failed"


MediaEvent = Union[Ready, DurationKnown, PositionUpdate, Ended, Failed]
