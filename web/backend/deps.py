from fastapi import Request

from tunebox.core.config import Config
from tunebox.domain.catalog import DurationProbe, FileStore, TrackCatalog


def get_catalog(request: Request) -> TrackCatalog:
    """FastAPI dependency for the app's track catalog."""
    return request.app.state.catalog


def get_store(request: Request) -> FileStore:
    """FastAPI dependency for the app's file store."""
    return request.app.state.store


def get_config(request: Request) -> Config:
    """FastAPI dependency for configuration."""
    return request.app.state.config


def get_duration_probe(request: Request) -> DurationProbe:
    return request.app.state.duration_probe
