"""Pytest configuration for backend tests.

Every test gets its own app with a fresh catalog and a temporary upload dir.
"""

import io
import wave

import pytest
from fastapi.testclient import TestClient

from tunebox.core.config import Config, StorageConfig
from web.backend.main import create_app

SAMPLE_RATE = 8000


def make_wav(seconds: int = 10, sample_rate: int = SAMPLE_RATE) -> bytes:
    """Build an 8-bit mono WAV with a repeating ramp so byte slices are distinct."""
    frames = bytes((i * 7) % 256 for i in range(seconds * sample_rate))
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(1)
        wav.setframerate(sample_rate)
        wav.writeframes(frames)
    return buffer.getvalue()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def config(upload_dir) -> Config:
    return Config(storage=StorageConfig(upload_dir=str(upload_dir), chunk_size=4096))


@pytest.fixture
def app(config):
    return create_app(config=config)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture(scope="session")
def wav_bytes() -> bytes:
    """A 10-second WAV fixture."""
    return make_wav(seconds=10)


@pytest.fixture
def uploaded_track(client, wav_bytes) -> dict:
    """Upload the WAV fixture and return the created track record."""
    response = client.post(
        "/api/tracks/upload",
        files={"audio": ("tone.wav", wav_bytes, "audio/wav")},
    )
    assert response.status_code == 200, response.text
    return response.json()
