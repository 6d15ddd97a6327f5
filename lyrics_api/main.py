from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.errors import ErrorBoundaryMiddleware, PreflightMiddleware, register_error_handlers
from .api.responses import CatalogJSONResponse
from .api.routes.contacts import admin_router as contacts_admin_router
from .api.routes.contacts import router as contacts_router
from .api.routes.copyright_owners import admin_router as copyright_owners_admin_router
from .api.routes.copyright_owners import router as copyright_owners_router
from .api.routes.people import (
    artists_admin_router,
    artists_router,
    composers_admin_router,
    composers_router,
)
from .api.routes.reports import admin_router as reports_admin_router
from .api.routes.reports import router as reports_router
from .api.routes.songs import admin_router as songs_admin_router
from .api.routes.songs import router as songs_router
from .api.routes.static import router as static_router
from .core.config import get_settings
from .core.logging import configure_logging
from .db import init_db
from .telemetry import configure_tracing, setup_prometheus


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        default_response_class=CatalogJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(ErrorBoundaryMiddleware)
    # Added last so it runs first: OPTIONS never reaches routing.
    app.add_middleware(PreflightMiddleware)
    register_error_handlers(app)

    @app.on_event("startup")
    async def _startup() -> None:
        await init_db()

    @app.get("/healthz")
    def healthz() -> dict[str, str | bool]:
        return {"ok": True, "service": "api"}

    for router in (
        songs_router,
        songs_admin_router,
        artists_router,
        artists_admin_router,
        composers_router,
        composers_admin_router,
        copyright_owners_router,
        copyright_owners_admin_router,
        reports_router,
        reports_admin_router,
        contacts_router,
        contacts_admin_router,
    ):
        app.include_router(router, prefix=settings.api_prefix)

    if settings.enable_prometheus_metrics:
        setup_prometheus(app)
    configure_tracing(app)

    app.include_router(static_router)

    return app


app = create_app()
