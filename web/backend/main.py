from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from tunebox.core.config import Config, load_config
from tunebox.domain.catalog import (
    DurationProbe,
    FileStore,
    TrackCatalog,
    get_duration_probe,
)


def create_app(
    config: Optional[Config] = None,
    catalog: Optional[TrackCatalog] = None,
    store: Optional[FileStore] = None,
    duration_probe: Optional[DurationProbe] = None,
) -> FastAPI:
    """Build the API with its own catalog and file store.

    Run with: uvicorn web.backend.main:create_app --factory
    """
    config = config or load_config()

    app = FastAPI(title="Tunebox Web API", version="1.0.0")

    app.state.config = config
    app.state.catalog = catalog if catalog is not None else TrackCatalog()
    app.state.store = store or FileStore(
        config.storage.resolve_upload_dir(), chunk_size=config.storage.chunk_size
    )
    app.state.duration_probe = duration_probe or get_duration_probe(
        config.storage.extract_duration
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
    )

    # Include routers
    from web.backend.routers import tracks

    app.include_router(tracks.router, prefix="/api", tags=["tracks"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    logger.info(f"API ready, storing uploads in {app.state.store.root}")
    return app
