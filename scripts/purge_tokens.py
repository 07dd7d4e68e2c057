"""Delete used and expired account tokens once (Postgres only).

For deployments that run the sweep from cron instead of the in-app task
(TOKEN_PURGE_INTERVAL_SECONDS=0).

Usage:
    python -m scripts.purge_tokens
"""

import asyncio
import sys

from officeauth.application.services import TokenLifecycleManager
from officeauth.core.config import get_settings
from officeauth.infrastructure.persistence.database import dispose_engine, transactional_session
from officeauth.infrastructure.persistence.repositories import TokenRepository, UserRepository


async def main() -> None:
    settings = get_settings()
    if settings.storage_backend != "postgres":
        print("This script requires STORAGE_BACKEND=postgres", file=sys.stderr)
        sys.exit(1)
    try:
        async with transactional_session() as session:
            manager = TokenLifecycleManager(TokenRepository(session), UserRepository(session))
            removed = await manager.purge_expired()
        print(f"Purged {removed} token(s)")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
