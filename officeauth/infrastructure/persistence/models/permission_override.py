"""Role permission override ORM model. Unique per (role, permission_slug)."""

from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from officeauth.infrastructure.persistence.database import Base
from officeauth.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class RolePermissionOverride(CuidMixin, TimestampMixin, Base):
    """granted=True adds the slug to the role's defaults, False removes it."""

    __tablename__ = "role_permission_override"

    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    permission_slug: Mapped[str] = mapped_column(String(100), nullable=False)
    granted: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        UniqueConstraint("role", "permission_slug", name="uq_role_permission_override"),
    )
