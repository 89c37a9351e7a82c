"""
tiffin_session.credential_store.app

FastAPI app factory for the development credential store.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose the DB engine/session factory around the app lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tiffin_session import __version__
from tiffin_session.credential_store.db.session import create_engine, create_sessionmaker, init_db
from tiffin_session.credential_store.errors import register_error_handlers
from tiffin_session.credential_store.routers.auth import router as auth_router
from tiffin_session.credential_store.routers.health import router as health_router
from tiffin_session.observability.logging import configure_from_settings, get_logger
from tiffin_session.observability.middleware import RequestContextMiddleware
from tiffin_session.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_from_settings(settings, component="store")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        # The store has no migrations; tables are created on every start.
        await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Tiffin Credential Store (development)",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    # Clients use `<host>/api` as their base url.
    app.include_router(auth_router, prefix="/api")
    return app
