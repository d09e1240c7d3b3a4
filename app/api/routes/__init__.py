from __future__ import annotations

from app.api.routes.health import router as health_router
from app.api.routes.selah import router as selah_router

__all__ = ["health_router", "selah_router"]
