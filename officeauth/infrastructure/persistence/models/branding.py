"""Office branding ORM model. At most one row per office."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from officeauth.infrastructure.persistence.database import Base
from officeauth.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class OfficeBranding(CuidMixin, TimestampMixin, Base):
    """Custom identity for one office. NULL columns fall back to the platform default."""

    __tablename__ = "office_branding"

    office_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("office.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    primary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    secondary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    accent_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    default_theme: Mapped[str | None] = mapped_column(String(10), nullable=True)
    reply_to_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reply_to_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_by_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
