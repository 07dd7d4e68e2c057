"""Office (tenant) ORM model."""

from sqlalchemy import Boolean, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from officeauth.infrastructure.persistence.database import Base
from officeauth.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Office(CuidMixin, TimestampMixin, Base):
    """Tax office. slug is the lowercase subdomain key (unique when set)."""

    __tablename__ = "office"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    default_tax_year: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("2024")
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
