from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import StreamingResponse
from loguru import logger

from tunebox.core.config import Config
from tunebox.domain.catalog import (
    DurationProbe,
    FileStore,
    RangeNotSatisfiableError,
    StorageError,
    TrackCatalog,
    TrackNotFoundError,
    UnsupportedMediaTypeError,
    ValidationError,
)

from ..deps import get_catalog, get_config, get_duration_probe, get_store
from ..schemas import MessageResponse, TrackResponse
from ..streaming import serve_track

router = APIRouter()


@router.get("/tracks", response_model=list[TrackResponse])
async def list_tracks(catalog: TrackCatalog = Depends(get_catalog)):
    return [TrackResponse.from_track(track) for track in catalog.list_tracks()]


@router.post("/tracks/upload", response_model=TrackResponse)
def upload_track(
    audio: Optional[UploadFile] = File(None),
    catalog: TrackCatalog = Depends(get_catalog),
    store: FileStore = Depends(get_store),
    config: Config = Depends(get_config),
    probe: DurationProbe = Depends(get_duration_probe),
):
    """Store an uploaded audio file and create its catalog record."""
    if audio is None or not audio.filename:
        raise HTTPException(400, "No file uploaded")

    if audio.content_type not in config.storage.allowed_mime_types:
        logger.warning(f"Rejected upload {audio.filename!r}: {audio.content_type}")
        raise HTTPException(400, str(UnsupportedMediaTypeError(audio.content_type)))

    try:
        stored = store.save_upload(audio.file, config.storage.max_upload_bytes)
    except ValidationError as e:
        logger.warning(f"Rejected upload {audio.filename!r}: {e}")
        raise HTTPException(400, str(e))
    except StorageError:
        logger.exception(f"Failed to store upload {audio.filename!r}")
        raise HTTPException(500, "Failed to upload file")

    # From here on the file exists on disk and must not outlive a failure
    try:
        duration = probe(stored.path)
        track = catalog.create_track(
            {
                "filename": stored.filename,
                "original_name": audio.filename,
                "file_size": stored.size,
                "duration": duration,
                "mime_type": audio.content_type,
                "file_path": stored.path,
            }
        )
    except ValidationError as e:
        store.remove(stored.path)
        logger.warning(f"Rejected upload {audio.filename!r}: {e}")
        raise HTTPException(400, str(e))
    except Exception:
        store.remove(stored.path)
        logger.exception(f"Failed to catalog upload {audio.filename!r}")
        raise HTTPException(500, "Failed to upload file")

    logger.info(
        f"Uploaded track {track.id}: {track.original_name} "
        f"({track.file_size} bytes, {track.mime_type})"
    )
    return TrackResponse.from_track(track)


@router.get("/tracks/{track_id}/stream")
def stream_audio(
    track_id: str,
    request: Request,
    catalog: TrackCatalog = Depends(get_catalog),
    store: FileStore = Depends(get_store),
) -> StreamingResponse:
    range_header = request.headers.get("range")
    try:
        response = serve_track(catalog, store, track_id, range_header)
    except TrackNotFoundError as e:
        raise HTTPException(404, str(e))
    except RangeNotSatisfiableError as e:
        logger.debug(str(e))
        raise HTTPException(
            416,
            "Requested range not satisfiable",
            headers={"Content-Range": f"bytes */{e.file_size}"},
        )
    except (StorageError, OSError):
        logger.exception(f"Failed to stream track {track_id}")
        raise HTTPException(500, "Failed to stream audio")

    logger.debug(f"Streaming track {track_id} ({range_header or 'full'})")
    return response


@router.delete("/tracks/{track_id}", response_model=MessageResponse)
async def delete_track(
    track_id: str,
    catalog: TrackCatalog = Depends(get_catalog),
    store: FileStore = Depends(get_store),
):
    track = catalog.delete_track(track_id)
    if track is None:
        raise HTTPException(404, "Track not found")

    try:
        removed = store.remove(track.file_path)
    except OSError:
        logger.exception(f"Failed to remove file for track {track_id}")
        raise HTTPException(500, "Failed to delete track")

    if not removed:
        logger.warning(f"Track {track_id} had no stored file to remove")

    logger.info(f"Deleted track {track_id}: {track.original_name}")
    return MessageResponse(message="Track deleted successfully")
