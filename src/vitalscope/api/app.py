"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes the cache through CacheAdapter
- Returns report payloads for the popup UI
- Forbidden: classification logic, direct SQL, rendering
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vitalscope.core.config import Settings, get_settings
from vitalscope.db.cache import CacheAdapter, SqlCacheAdapter
from vitalscope.db.session import get_session_factory
from vitalscope.providers.base import FetchAdapter
from vitalscope.providers.crux import CruxFetchAdapter


def get_cache_adapter() -> CacheAdapter:
    """Dependency to get the local metrics cache."""
    return SqlCacheAdapter(get_session_factory())


async def get_fetch_adapter(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[FetchAdapter, None]:
    """Dependency to get the remote field data adapter.

    Yields:
        CrUX adapter whose HTTP client is closed after the request.
    """
    async with httpx.AsyncClient() as client:
        yield CruxFetchAdapter(client, settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Open the cache and create its tables before serving
    get_session_factory()
    yield


def create_app() -> FastAPI:
    """Create FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="vitalscope API",
        description="Core Web Vitals field and local reports",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Popup pages are served from a browser extension origin
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^(chrome-extension|moz-extension)://.*$",
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from vitalscope.api.routes import metrics, reports

    app.include_router(metrics.router, prefix="/api")
    app.include_router(reports.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
