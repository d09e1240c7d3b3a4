"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build a fresh instance.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import health_router, selah_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Selah API",
        description=(
            "A single reflective pause: one opening question, one short "
            "response, one plain reflection and an exit sentence. Errors use "
            "a uniform {error, message} body."
        ),
        version="0.1.0",
    )

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(selah_router, prefix="/api")
    app.include_router(health_router)

    return app
