"""Application lifespan: startup and shutdown.

Wiring only: the periodic token purge and DB engine dispose. The storage
backend itself is attached in create_app() so it exists even when the
lifespan is not run (e.g. ASGITransport in tests).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from officeauth.core.config import get_settings

logger = logging.getLogger(__name__)


async def run_token_purge(app: FastAPI, interval_seconds: int) -> None:
    """Delete expired and used tokens every interval_seconds until cancelled."""
    from officeauth.api.v1.dependencies import purge_expired_tokens

    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await purge_expired_tokens(app)
        except Exception:
            logger.exception("Token purge failed")
            continue
        if removed:
            logger.info("Purged %d expired or used tokens", removed)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: token purge task (when token_purge_interval_seconds > 0).
    Shutdown: purge task cancel, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    logger.info(
        "Starting %s %s (storage: %s)",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
    )
    if settings.token_purge_interval_seconds > 0:
        app.state.token_purge_task = asyncio.create_task(
            run_token_purge(app, settings.token_purge_interval_seconds)
        )
    else:
        app.state.token_purge_task = None

    yield

    # ---- Shutdown ----
    purge_task = getattr(app.state, "token_purge_task", None)
    if purge_task is not None:
        purge_task.cancel()
        try:
            await purge_task
        except asyncio.CancelledError:
            pass
        logger.info("Token purge task stopped")

    from officeauth.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
