"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain enums only; no infrastructure imports.
Each implementation must make the multi-row operations below atomic: a
concurrent reader sees either the state before or after, never a mix.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from officeauth.domain.enums import Role, TokenKind

if TYPE_CHECKING:
    from officeauth.application.dtos.account import AccountRecord
    from officeauth.application.dtos.audit import RoleAuditEntry
    from officeauth.application.dtos.branding import BrandingRecord
    from officeauth.application.dtos.office import OfficeResult
    from officeauth.application.dtos.permission import OverrideChange
    from officeauth.application.dtos.token import TokenRecord


class IOverrideStore(Protocol):
    """Per-role permission overrides: slug -> granted (True) / revoked (False)."""

    async def get_overrides(self, role: Role) -> dict[str, bool]:
        """Return the overrides stored for role."""

    async def snapshot(self) -> dict[Role, dict[str, bool]]:
        """Return every role's overrides read at one point in time."""

    async def apply(
        self, role: Role, changes: Mapping[str, bool | None]
    ) -> list[OverrideChange]:
        """Set (bool) or clear (None) overrides for role as one atomic unit.

        Returns only the slugs whose stored value actually changed.
        """


class ITokenStore(Protocol):
    """Single-use tokens keyed by the token string."""

    async def insert(self, record: TokenRecord) -> None:
        """Store a newly issued token."""

    async def get(self, token: str) -> TokenRecord | None:
        """Return the token record or None."""

    async def mark_used(
        self, token: str, now: datetime, kind: TokenKind | None = None
    ) -> TokenRecord | None:
        """Compare-and-set used_at = now where unused, unexpired (and of kind).

        Returns the updated record for the single caller that won, else None.
        """

    async def increment_resend_count(self, token: str) -> int | None:
        """Increment resend_count; return the new value or None if unknown."""

    async def latest_active(
        self, user_id: str, kind: TokenKind, now: datetime
    ) -> TokenRecord | None:
        """Return the newest unused, unexpired token of kind for user."""

    async def delete_expired_or_used(self, now: datetime) -> int:
        """Delete tokens that are used or expired at now; return count."""

    async def delete_for_user(self, user_id: str) -> int:
        """Delete all tokens of user; return count."""


class IBrandingStore(Protocol):
    """At most one branding record per office."""

    async def get(self, office_id: str) -> BrandingRecord | None:
        """Return the office's record or None."""

    async def upsert(
        self,
        office_id: str,
        changes: Mapping[str, Any],
        actor_id: str | None,
        now: datetime,
    ) -> BrandingRecord:
        """Create the record or merge changes into it atomically (omitted keys kept)."""

    async def delete(self, office_id: str) -> bool:
        """Delete the record; return True if one existed."""


class IOfficeRepository(Protocol):
    """Offices (tenants)."""

    async def create(self, office: OfficeResult) -> OfficeResult:
        """Insert office. Raises OfficeSlugTakenException on a duplicate slug."""

    async def get_by_id(self, office_id: str) -> OfficeResult | None:
        """Return office by id."""

    async def get_by_slug(self, slug: str) -> OfficeResult | None:
        """Return office by normalized (lowercase) slug."""

    async def list_offices(self, active_only: bool = False) -> list[OfficeResult]:
        """Return offices ordered by name."""

    async def update(
        self, office_id: str, changes: Mapping[str, Any], now: datetime
    ) -> OfficeResult | None:
        """Apply validated changes. Raises OfficeSlugTakenException on a duplicate slug."""


class ICredentialStore(Protocol):
    """User accounts, including password hashes."""

    async def create(self, record: AccountRecord) -> AccountRecord:
        """Insert account. Raises AccountAlreadyExistsException on a duplicate email."""

    async def get_by_id(self, user_id: str) -> AccountRecord | None:
        """Return account by id."""

    async def get_by_email(self, email: str) -> AccountRecord | None:
        """Return account by normalized email."""

    async def update(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> AccountRecord | None:
        """Apply changes to the account; return the new record or None if unknown."""


class IRoleAuditTrail(Protocol):
    """Append-only role/permission change log."""

    async def append(self, entry: RoleAuditEntry) -> RoleAuditEntry:
        """Store entry; entries are never updated or deleted."""

    async def list_entries(
        self, role: Role | None = None, limit: int = 100
    ) -> list[RoleAuditEntry]:
        """Return entries newest first, optionally for one role."""
