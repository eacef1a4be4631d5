"""Byte-range streaming of stored tracks.

Each request opens its own file handle and streams only the requested window,
so concurrent seeks against one track never interfere.
"""

import re
from typing import Optional

from fastapi.responses import StreamingResponse
from loguru import logger

from tunebox.domain.catalog import (
    ByteRange,
    FileStore,
    RangeNotSatisfiableError,
    TrackCatalog,
)

RANGE_PATTERN = re.compile(r"^bytes=(\d*)-(\d*)$")


def parse_range_header(range_header: str, file_size: int) -> Optional[ByteRange]:
    """Parse a single ``bytes=start-end`` range.

    An empty end means end of file; ``bytes=-N`` selects the last N bytes.
    Malformed headers return None and the caller serves the whole file.

    Raises:
        RangeNotSatisfiableError: If a well-formed range lies outside the file
    """
    match = RANGE_PATTERN.match(range_header.strip())
    if not match:
        return None

    start_str, end_str = match.groups()
    if not start_str and not end_str:
        return None

    if not start_str:
        suffix = int(end_str)
        if suffix == 0 or file_size == 0:
            raise RangeNotSatisfiableError(file_size, range_header)
        return ByteRange(max(0, file_size - suffix), file_size - 1)

    start = int(start_str)
    end = int(end_str) if end_str else file_size - 1
    if start > end or end >= file_size:
        raise RangeNotSatisfiableError(file_size, range_header)

    return ByteRange(start, end)


def serve_track(
    catalog: TrackCatalog,
    store: FileStore,
    track_id: str,
    range_header: Optional[str],
) -> StreamingResponse:
    """Stream a track in full (200) or as one byte range (206).

    Raises:
        TrackNotFoundError: Unknown track id
        StoredFileMissingError: Metadata exists but the file is gone
        RangeNotSatisfiableError: Range outside the file
        StorageError: Any other read failure
    """
    track = catalog.require_track(track_id)
    file_size = store.stat_size(track.file_path)

    byte_range = parse_range_header(range_header, file_size) if range_header else None

    if byte_range is None:
        if range_header:
            logger.debug(f"Ignoring malformed range {range_header!r} for {track_id}")
        handle = store.open_range(track.file_path, 0)
        return StreamingResponse(
            store.iter_file(handle, file_size),
            status_code=200,
            media_type=track.mime_type,
            headers={
                "Content-Length": str(file_size),
                "Accept-Ranges": "bytes",
            },
        )

    handle = store.open_range(track.file_path, byte_range.start)
    return StreamingResponse(
        store.iter_file(handle, byte_range.length),
        status_code=206,
        media_type=track.mime_type,
        headers={
            "Content-Range": byte_range.content_range(file_size),
            "Accept-Ranges": "bytes",
            "Content-Length": str(byte_range.length),
        },
    )
