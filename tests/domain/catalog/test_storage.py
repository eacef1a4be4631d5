"""Tests for the upload file store."""

import io
from concurrent.futures import ThreadPoolExecutor

import pytest

from tunebox.domain.catalog import (
    FileStore,
    StorageError,
    StoredFileMissingError,
    UploadTooLargeError,
)

CONTENT = bytes(i % 251 for i in range(10_000))


@pytest.fixture
def store(tmp_path) -> FileStore:
    return FileStore(tmp_path / "uploads", chunk_size=1024)


@pytest.fixture
def stored(store):
    return store.save_upload(io.BytesIO(CONTENT), max_bytes=len(CONTENT))


def read_window(store: FileStore, path: str, start: int, length: int) -> bytes:
    return b"".join(store.iter_file(store.open_range(path, start), length))


class TestSaveUpload:
    def test_writes_content(self, store, stored):
        assert stored.size == len(CONTENT)
        assert (store.root / stored.filename).read_bytes() == CONTENT
        assert stored.path == str(store.root / stored.filename)

    def test_random_names(self, store):
        first = store.save_upload(io.BytesIO(b"x"), max_bytes=10)
        second = store.save_upload(io.BytesIO(b"x"), max_bytes=10)
        assert first.filename != second.filename

    def test_too_large_removes_partial_file(self, store):
        with pytest.raises(UploadTooLargeError):
            store.save_upload(io.BytesIO(CONTENT), max_bytes=len(CONTENT) - 1)
        assert list(store.root.iterdir()) == []

    def test_write_failure_removes_partial_file(self, store):
        class BrokenSource:
            def __init__(self):
                self.reads = 0

            def read(self, size):
                self.reads += 1
                if self.reads > 2:
                    raise OSError("connection reset")
                return b"a" * size

        with pytest.raises(StorageError):
            store.save_upload(BrokenSource(), max_bytes=1_000_000)
        assert list(store.root.iterdir()) == []

    def test_empty_upload(self, store):
        result = store.save_upload(io.BytesIO(b""), max_bytes=10)
        assert result.size == 0


class TestReads:
    def test_stat_size(self, store, stored):
        assert store.stat_size(stored.path) == len(CONTENT)

    def test_window_matches_slice(self, store, stored):
        for start, length in [(0, 1), (1023, 2), (5000, 3000), (9990, 10)]:
            assert read_window(store, stored.path, start, length) == CONTENT[start : start + length]

    def test_window_stops_at_end_of_file(self, store, stored):
        assert read_window(store, stored.path, 9_995, 100) == CONTENT[9_995:]

    def test_iter_file_closes_handle(self, store, stored):
        handle = store.open_range(stored.path, 0)
        chunks = store.iter_file(handle, len(CONTENT))
        next(chunks)
        chunks.close()
        assert handle.closed

    def test_missing_file(self, store):
        missing = store.root / "gone"
        with pytest.raises(StoredFileMissingError, match="Audio file not found"):
            store.stat_size(missing)
        with pytest.raises(StoredFileMissingError):
            store.open_range(missing, 0)

    def test_directory_is_not_a_stored_file(self, store):
        (store.root / "nested").mkdir()
        with pytest.raises(StoredFileMissingError):
            store.stat_size(store.root / "nested")

    def test_path_outside_root_blocked(self, store, tmp_path):
        outside = tmp_path / "secret.mp3"
        outside.write_bytes(b"secret")

        with pytest.raises(StoredFileMissingError):
            store.open_range(outside, 0)
        with pytest.raises(StoredFileMissingError):
            store.stat_size(outside)

    def test_concurrent_windows_independent(self, store, stored):
        """Test parallel range reads on one file do not interfere."""
        windows = [(i * 400, 700) for i in range(20)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(
                pool.map(lambda w: read_window(store, stored.path, *w), windows)
            )

        for (start, length), data in zip(windows, results):
            assert data == CONTENT[start : start + length]


class TestRemove:
    def test_remove(self, store, stored):
        assert store.remove(stored.path) is True
        with pytest.raises(StoredFileMissingError):
            store.stat_size(stored.path)

    def test_remove_is_idempotent(self, store, stored):
        store.remove(stored.path)
        assert store.remove(stored.path) is False
