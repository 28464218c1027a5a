"""Bookstore API — FastAPI application factory and server entry point.

Invariants:
    - The router is constructed by the caller and passed in (no module-level app)
    - Global error handlers map every failure to the {status, message} envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app(router, settings) is the composition root; serve() and the
      uvicorn --factory target (build_app) are thin wrappers around it
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api.error_handlers import register_error_handlers
from bookstore.api.request_context import RequestContextMiddleware
from bookstore.api.router import build_api_router
from bookstore.config import Settings, get_settings
from bookstore.infrastructure import database
from bookstore.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _make_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_auto_create:
            await manager.create_all()
        logger.info(f"{settings.service_name} started")
        yield
        await manager.dispose()
        logger.info(f"{settings.service_name} shutting down")

    return lifespan


def create_app(router: APIRouter, settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI app serving the given router."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Bookstore API",
        version=settings.version,
        lifespan=_make_lifespan(settings),
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    register_error_handlers(app, expose_details=settings.expose_error_details)
    return app


def build_app() -> FastAPI:
    """uvicorn factory target: `uvicorn bookstore.main:build_app --factory`."""
    return create_app(build_api_router())


def serve() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(build_api_router(), settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    serve()
