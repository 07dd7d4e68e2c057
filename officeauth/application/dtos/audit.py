"""DTOs for the role audit trail."""

from dataclasses import dataclass
from datetime import datetime

from officeauth.domain.enums import Role, RoleAuditAction


@dataclass(frozen=True)
class RoleAuditEntry:
    """Append-only record of a permission override or user role change.

    Permission entries carry 'granted'/'revoked' values; role changes carry
    role names and the affected user.
    """

    id: str
    action: RoleAuditAction
    actor_id: str
    role: Role
    new_value: str
    created_at: datetime
    permission_slug: str | None = None
    old_value: str | None = None
    target_user_id: str | None = None
