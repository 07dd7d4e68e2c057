"""Create (or promote) an admin account (Postgres only).

Usage:
    python -m scripts.create_admin <email> [password] [--super]
If password is omitted, a random one is printed. With --super the account
gets the super_admin role. An existing account is promoted, not recreated.
"""

import asyncio
import secrets
import sys

from officeauth.application.services import AccountService, TokenLifecycleManager
from officeauth.core.config import get_settings
from officeauth.domain.enums import Role
from officeauth.infrastructure.persistence.database import transactional_session
from officeauth.infrastructure.persistence.repositories import (
    RoleAuditRepository,
    TokenRepository,
    UserRepository,
)
from officeauth.infrastructure.security.password import BcryptPasswordHasher
from officeauth.shared.utils.datetime import utc_now

# Recorded as the actor in the role audit trail.
SCRIPT_ACTOR = "script:create_admin"


async def main() -> None:
    """Create or promote the admin account."""
    args = [a for a in sys.argv[1:] if a != "--super"]
    if not args:
        print(
            "Usage: python -m scripts.create_admin <email> [password] [--super]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = args[0]
    password = args[1] if len(args) > 1 else None
    role = Role.SUPER_ADMIN if "--super" in sys.argv else Role.ADMIN

    settings = get_settings()
    if settings.storage_backend != "postgres":
        print("This script requires STORAGE_BACKEND=postgres", file=sys.stderr)
        sys.exit(1)

    async with transactional_session() as session:
        users = UserRepository(session)
        accounts = AccountService(
            users,
            TokenLifecycleManager(TokenRepository(session), users),
            RoleAuditRepository(session),
            BcryptPasswordHasher(),
        )
        existing = await users.get_by_email(email.strip().lower())
        if existing is not None:
            account = await accounts.change_role(existing.id, role, actor_id=SCRIPT_ACTOR)
            print(f"Promoted {account.id} ({account.email}) to {role.value}")
            return
        if not password:
            password = secrets.token_urlsafe(12)
        account, _ = await accounts.register(email, password, role=role)
        # Operator-created accounts skip the verification email.
        now = utc_now()
        await users.update(account.id, {"email_verified_at": now}, now)
        print(f"Created {role.value}: {account.id} ({account.email})")
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
