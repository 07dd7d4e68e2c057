"""DTOs for office (tenant) use cases."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OfficeResult:
    """Office read-model."""

    id: str
    name: str
    slug: str | None
    default_tax_year: int
    is_active: bool = True
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Fields update_office accepts (name/slug validated separately).
OFFICE_UPDATABLE_FIELDS: tuple[str, ...] = (
    "name",
    "slug",
    "address",
    "city",
    "state",
    "zip_code",
    "phone",
    "email",
    "default_tax_year",
    "is_active",
)
