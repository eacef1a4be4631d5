"""Tests for the in-memory track catalog."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from tunebox.domain.catalog import (
    TrackCatalog,
    TrackCreate,
    TrackNotFoundError,
    ValidationError,
)


def track_data(name: str = "song.mp3", **overrides) -> dict:
    data = {
        "filename": f"stored-{name}",
        "original_name": name,
        "file_size": 1234,
        "mime_type": "audio/mpeg",
        "file_path": f"/uploads/stored-{name}",
    }
    data.update(overrides)
    return data


@pytest.fixture
def catalog() -> TrackCatalog:
    return TrackCatalog()


class TestCreateTrack:
    def test_assigns_unique_ids(self, catalog):
        first = catalog.create_track(track_data("a.mp3"))
        second = catalog.create_track(track_data("b.mp3"))

        assert first.id != second.id
        assert len(catalog) == 2
        assert first.id in catalog

    def test_accepts_validated_model(self, catalog):
        track = catalog.create_track(TrackCreate(**track_data(duration=12.5)))
        assert track.duration == 12.5

    def test_duration_defaults_to_unknown(self, catalog):
        """Test missing duration stays None rather than becoming zero."""
        track = catalog.create_track(track_data())
        assert track.duration is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"original_name": ""},
            {"file_size": -1},
            {"mime_type": "   "},
            {"duration": -3.0},
            {"file_size": "lots"},
        ],
    )
    def test_rejects_malformed_payload(self, catalog, overrides):
        with pytest.raises(ValidationError, match="Invalid track data"):
            catalog.create_track(track_data(**overrides))
        assert len(catalog) == 0

    def test_names_stored_verbatim(self, catalog):
        """Test client-supplied names and MIME types keep their whitespace."""
        track = catalog.create_track(
            track_data(original_name="  Side A .mp3 ", mime_type="audio/mpeg ")
        )

        assert track.original_name == "  Side A .mp3 "
        assert track.mime_type == "audio/mpeg "

    def test_rejects_missing_field(self, catalog):
        data = track_data()
        del data["file_path"]
        with pytest.raises(ValidationError):
            catalog.create_track(data)


class TestLookup:
    def test_list_in_creation_order(self, catalog):
        names = ["c.mp3", "a.mp3", "b.mp3"]
        for name in names:
            catalog.create_track(track_data(name))

        assert [t.original_name for t in catalog.list_tracks()] == names

    def test_get_track(self, catalog):
        track = catalog.create_track(track_data())
        assert catalog.get_track(track.id) == track
        assert catalog.get_track("missing") is None

    def test_require_track_raises(self, catalog):
        with pytest.raises(TrackNotFoundError, match="Track not found") as exc_info:
            catalog.require_track("missing")
        assert exc_info.value.track_id == "missing"


class TestDeleteTrack:
    def test_delete_returns_record(self, catalog):
        track = catalog.create_track(track_data())

        assert catalog.delete_track(track.id) == track
        assert catalog.get_track(track.id) is None

    def test_delete_twice(self, catalog):
        track = catalog.create_track(track_data())

        assert catalog.delete_track(track.id) is not None
        assert catalog.delete_track(track.id) is None

    def test_delete_unknown(self, catalog):
        assert catalog.delete_track("missing") is None

    def test_concurrent_deletes_single_winner(self, catalog):
        """Test only one of many racing deletes of one id succeeds."""
        track = catalog.create_track(track_data())

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: catalog.delete_track(track.id), range(32)))

        assert sum(1 for r in results if r is not None) == 1

    def test_delete_leaves_other_tracks(self, catalog):
        keep = catalog.create_track(track_data("keep.mp3"))
        drop = catalog.create_track(track_data("drop.mp3"))

        catalog.delete_track(drop.id)

        assert catalog.list_tracks() == [keep]
