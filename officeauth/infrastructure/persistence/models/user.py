"""User account ORM model (Credential Store)."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from officeauth.infrastructure.persistence.database import Base
from officeauth.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User account. Table: app_user. Email is unique and stored lowercase.

    Deleted accounts keep their row with status 'scrubbed' and identifying
    fields cleared.
    """

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, server_default=text("'client'")
    )
    office_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("office.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, server_default=text("'active'")
    )
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('client', 'agent', 'tax_office', 'admin', 'super_admin')",
            name="ck_app_user_role",
        ),
        CheckConstraint(
            "status IN ('active', 'deactivated', 'scrubbed')",
            name="ck_app_user_status",
        ),
    )
