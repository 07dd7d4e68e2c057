"""FastAPI application entry point.

Wiring only: storage backend, lifespan, exception handlers, middleware,
routers. See officeauth.core.lifespan and officeauth.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from officeauth.api.v1 import api_router
from officeauth.core.config import get_settings
from officeauth.core.exception_handlers import register_exception_handlers
from officeauth.core.lifespan import create_lifespan
from officeauth.core.limiter import limiter
from officeauth.infrastructure.memory import MemoryBackend
from officeauth.shared.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # In-process stores live as long as the app; postgres sessions are per request.
    app.state.memory = MemoryBackend() if settings.storage_backend == "memory" else None

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
