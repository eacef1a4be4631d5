"""
File storage for uploaded audio.

Uploaded bytes live under one root directory with random names. Reads are
always windowed and chunked so large files are never held in memory.
"""

import os
import uuid
from pathlib import Path
from typing import BinaryIO, Iterator

from loguru import logger

from tunebox.core.path_security import is_path_within_root, validate_stored_path

from .exceptions import StorageError, StoredFileMissingError, UploadTooLargeError
from .models import StoredFile

DEFAULT_CHUNK_SIZE = 64 * 1024


class FileStore:
    """Byte-addressable store rooted at one directory."""

    def __init__(self, root: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.root = Path(root)
        self.chunk_size = chunk_size
        self.root.mkdir(parents=True, exist_ok=True)

    def _checked_path(self, path: str | Path) -> Path:
        candidate = Path(path)
        if not is_path_within_root(candidate, self.root):
            logger.warning(f"Blocked access outside upload dir: {candidate}")
            raise StoredFileMissingError()
        return candidate

    def save_upload(self, source: BinaryIO, max_bytes: int) -> StoredFile:
        """
        Copy an upload stream into the store.

        Args:
            source: Readable binary file object
            max_bytes: Upload size limit

        Returns:
            StoredFile describing the written file

        Raises:
            UploadTooLargeError: If the stream exceeds max_bytes (partial file removed)
            StorageError: If writing fails (partial file removed)
        """
        filename = uuid.uuid4().hex
        path = self.root / filename
        written = 0

        try:
            with open(path, "wb") as out:
                while True:
                    chunk = source.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise UploadTooLargeError(max_bytes)
                    out.write(chunk)
        except UploadTooLargeError:
            self.remove(path)
            raise
        except OSError as e:
            self.remove(path)
            raise StorageError(f"Failed to write upload: {e}") from e

        return StoredFile(filename=filename, path=str(path), size=written)

    def stat_size(self, path: str | Path) -> int:
        """Get the current byte size of a stored file.

        Raises:
            StoredFileMissingError: If the file is gone or outside the store
        """
        checked = validate_stored_path(Path(path), self.root)
        if checked is None:
            logger.debug(f"No stored file at {path}")
            raise StoredFileMissingError()
        try:
            return checked.stat().st_size
        except FileNotFoundError as e:
            raise StoredFileMissingError() from e

    def open_range(self, path: str | Path, start: int = 0) -> BinaryIO:
        """Open a stored file positioned at ``start``.

        Raises:
            StoredFileMissingError: If the file was removed
            StorageError: For any other read failure
        """
        checked = self._checked_path(path)
        try:
            handle = open(checked, "rb")
        except FileNotFoundError as e:
            raise StoredFileMissingError() from e
        except OSError as e:
            raise StorageError(f"Failed to open {checked.name}: {e}") from e

        try:
            handle.seek(start)
        except OSError as e:
            handle.close()
            raise StorageError(f"Failed to seek {checked.name}: {e}") from e
        return handle

    def iter_file(self, handle: BinaryIO, length: int) -> Iterator[bytes]:
        """Yield at most ``length`` bytes from an open handle, then close it."""
        remaining = length
        try:
            while remaining > 0:
                chunk = handle.read(min(self.chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk
        finally:
            handle.close()

    def remove(self, path: str | Path) -> bool:
        """Delete a stored file. Returns False if it was already gone."""
        try:
            os.unlink(self._checked_path(path))
            return True
        except (FileNotFoundError, StoredFileMissingError):
            return False
