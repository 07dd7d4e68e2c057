"""Role audit log ORM model. Append-only record of permission overrides and role changes."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, String, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from officeauth.infrastructure.persistence.database import Base
from officeauth.shared.utils.generators import generate_cuid


class RoleAuditLog(Base):
    """Who changed which role's access, from what to what, and when. No update/delete."""

    __tablename__ = "role_audit_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    actor_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    permission_slug: Mapped[str | None] = mapped_column(String(100), nullable=True)
    old_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    new_value: Mapped[str] = mapped_column(String(50), nullable=False)
    target_user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )


@event.listens_for(RoleAuditLog, "before_update")
def _prevent_role_audit_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: RoleAuditLog
) -> None:
    """Role audit entries are append-only; updates are forbidden."""
    raise ValueError("Role audit entries are immutable and cannot be updated.")


@event.listens_for(RoleAuditLog, "before_delete")
def _prevent_role_audit_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: RoleAuditLog
) -> None:
    """Role audit entries cannot be deleted."""
    raise ValueError("Role audit entries cannot be deleted.")
