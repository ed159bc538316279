from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from locale_table.api import cells, health, keys, languages, session, table
from locale_table.core.config import Settings, get_settings
from locale_table.core.logging_config import setup_logging
from locale_table.services.session import EditorSession

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory used by the runner and tests.

    It configures logging, seeds the editor session from settings, wires
    middleware and includes all API routers.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE, debug=settings.DEBUG)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.state.settings = settings
    app.state.session = EditorSession.from_settings(settings)

    if settings.ENABLE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Routers
    app.include_router(health.router)
    app.include_router(session.router)
    app.include_router(table.router)
    app.include_router(languages.router)
    app.include_router(keys.router)
    app.include_router(cells.router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Simple JSON landing endpoint."""
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "message": "Locale Table Editor API is running",
        }

    logger.info(
        "App created (structure=%s, folder=%s)",
        settings.STRUCTURE,
        settings.CATALOG_DIR or "not selected",
    )
    return app


# Default application instance used by ASGI servers (uvicorn locale_table.main:app).
app = create_app()
