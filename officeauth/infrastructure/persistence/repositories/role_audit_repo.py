"""Role audit trail (Postgres). Insert and read only."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.dtos.audit import RoleAuditEntry
from officeauth.domain.enums import Role, RoleAuditAction
from officeauth.infrastructure.persistence.models.role_audit_log import RoleAuditLog
from officeauth.shared.utils.datetime import ensure_utc


def _log_to_entry(row: RoleAuditLog) -> RoleAuditEntry:
    """Map ORM RoleAuditLog to RoleAuditEntry."""
    return RoleAuditEntry(
        id=row.id,
        action=RoleAuditAction(row.action),
        actor_id=row.actor_id,
        role=Role(row.role),
        permission_slug=row.permission_slug,
        old_value=row.old_value,
        new_value=row.new_value,
        target_user_id=row.target_user_id,
        created_at=ensure_utc(row.created_at),
    )


class RoleAuditRepository:
    """IRoleAuditTrail over role_audit_log."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(self, entry: RoleAuditEntry) -> RoleAuditEntry:
        self.db.add(
            RoleAuditLog(
                id=entry.id,
                action=entry.action.value,
                actor_id=entry.actor_id,
                role=entry.role.value,
                permission_slug=entry.permission_slug,
                old_value=entry.old_value,
                new_value=entry.new_value,
                target_user_id=entry.target_user_id,
                created_at=entry.created_at,
            )
        )
        await self.db.flush()
        return entry

    async def list_entries(
        self, role: Role | None = None, limit: int = 100
    ) -> list[RoleAuditEntry]:
        stmt = select(RoleAuditLog).order_by(
            RoleAuditLog.created_at.desc(), RoleAuditLog.id.desc()
        )
        if role is not None:
            stmt = stmt.where(RoleAuditLog.role == role.value)
        result = await self.db.execute(stmt.limit(limit))
        return [_log_to_entry(row) for row in result.scalars().all()]
