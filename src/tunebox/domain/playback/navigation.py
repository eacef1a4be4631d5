"""
Playlist navigation.

Pure functions over an ordered track sequence. Both directions wrap around so
the player loops the playlist instead of stopping at either end.
"""

from typing import Optional, Sequence

from tunebox.domain.catalog.models import Track


def track_position(playlist: Sequence[Track], track_id: str) -> Optional[int]:
    """
    Get the position (0-based index) of a track in a playlist.

    Args:
        playlist: Ordered tracks (catalog listing order)
        track_id: ID of the track to find

    Returns:
        0-based position of track, or None if not found
    """
    for i, track in enumerate(playlist):
        if track.id == track_id:
            return i
    return None


def next_track(playlist: Sequence[Track], current_id: str) -> Optional[Track]:
    """
    Get the track after current_id, wrapping from the last track to the first.

    Returns:
        Next track, or None if the playlist is empty or current_id is not in it
    """
    if not playlist:
        return None

    index = track_position(playlist, current_id)
    if index is None:
        return None

    return playlist[(index + 1) % len(playlist)]


def previous_track(playlist: Sequence[Track], current_id: str) -> Optional[Track]:
    """
    Get the track before current_id, wrapping from the first track to the last.

    Returns:
        Previous track, or None if the playlist is empty or current_id is not in it
    """
    if not playlist:
        return None

    index = track_position(playlist, current_id)
    if index is None:
        return None

    return playlist[len(playlist) - 1 if index == 0 else index - 1]
