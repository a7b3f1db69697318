"""FastAPI application factory."""

from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docsite import __version__
from docsite.api.dependencies import get_config, get_snapshot_store
from docsite.api.routes import docs, search, taxonomy
from docsite.pipeline.config import Config
from docsite.storage.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    The API only reads the snapshot; a missing index is reported by /health
    instead of blocking startup.
    """
    config = app.dependency_overrides.get(get_config, get_config)()
    store = SnapshotStore(config.index_path)
    if not store.exists():
        logger.warning(
            f"Docs index not found at {store.path}; run `docsite build` to generate it"
        )
    logger.info("Docs API started")

    yield

    logger.info("Docs API shutdown complete")


def create_app(config: Config | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Configuration to serve (defaults to the cached dependency)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Docs API",
        description="Read-only listing, lookup and search over the documentation index",
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    if config is not None:
        app.dependency_overrides[get_config] = lambda: config
    cors_origins = (config or get_config()).api.cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(docs.router)
    app.include_router(search.router)
    app.include_router(taxonomy.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Docs API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "search": "/search?q=",
                "tags": "/tags",
                "categories": "/categories",
            },
        }

    @app.get("/health")
    def health(store: SnapshotStore = Depends(get_snapshot_store)):
        """Health check endpoint."""
        if not store.exists():
            return {"status": "degraded", "index_path": str(store.path), "documents": 0}
        return {
            "status": "healthy",
            "index_path": str(store.path),
            "documents": len(store.load()),
        }

    return app
