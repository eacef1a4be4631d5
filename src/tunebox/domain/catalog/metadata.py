"""Duration extraction for uploaded audio."""

from typing import Callable, Optional

from loguru import logger
from mutagen import File as MutagenFile

DurationProbe = Callable[[str], Optional[float]]


def probe_duration(local_path: str) -> Optional[float]:
    """Read the duration in seconds from container metadata using mutagen.

    Returns None when the file cannot be parsed or reports no length.
    """
    try:
        audio_file = MutagenFile(local_path)
    except Exception as e:
        logger.warning(f"Could not read duration from {local_path}: {e}")
        return None

    if audio_file is None or not hasattr(audio_file, "info"):
        return None

    duration = getattr(audio_file.info, "length", None)
    if not duration or duration < 0:
        return None
    return float(duration)


def no_duration(local_path: str) -> Optional[float]:
    """Probe that leaves duration unset."""
    return None


def get_duration_probe(extract_duration: bool) -> DurationProbe:
    return probe_duration if extract_duration else no_duration


def format_duration(seconds: Optional[float]) -> str:
    """Format duration in seconds as MM:SS, or --:-- when unknown."""
    if seconds is None or seconds <= 0:
        return "--:--"
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"
