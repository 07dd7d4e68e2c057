"""Office (tenant) registry: create, look up by id or subdomain slug, update, deactivate."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from officeauth.application.dtos.office import OFFICE_UPDATABLE_FIELDS, OfficeResult
from officeauth.application.interfaces.repositories import IOfficeRepository
from officeauth.domain.exceptions import OfficeNotFoundException, ValidationException
from officeauth.domain.value_objects import OfficeSlug, normalize_email
from officeauth.shared.utils.datetime import utc_now
from officeauth.shared.utils.generators import generate_cuid

_MAX_LENGTH = {
    "name": 255,
    "address": 500,
    "city": 100,
    "state": 50,
    "zip_code": 20,
    "phone": 50,
    "email": 255,
}


def clean_office_fields(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalize office fields. Blank optional strings become None."""
    unknown = sorted(set(changes) - set(OFFICE_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationException(
            "Unknown office field(s): " + ", ".join(unknown), field=unknown[0]
        )
    cleaned: dict[str, Any] = {}
    for key, raw in changes.items():
        value = raw.strip() if isinstance(raw, str) else raw
        if key == "name":
            if not value:
                raise ValidationException("Office name is required", field="name")
        elif key == "slug":
            value = OfficeSlug.normalize(value).value if value else None
        elif key == "email":
            value = normalize_email(value) if value else None
        elif key == "default_tax_year":
            if not isinstance(value, int) or isinstance(value, bool) or not 1900 <= value <= 2100:
                raise ValidationException(
                    "default_tax_year must be a year between 1900 and 2100",
                    field=key,
                )
        elif key == "is_active":
            if not isinstance(value, bool):
                raise ValidationException("is_active must be true or false", field=key)
        elif value == "":
            value = None
        if isinstance(value, str) and len(value) > _MAX_LENGTH.get(key, 255):
            raise ValidationException(f"{key} is too long", field=key)
        cleaned[key] = value
    return cleaned


class OfficeRegistry:
    """Tenant registry. Slugs are unique and matched case-insensitively."""

    def __init__(
        self,
        office_repo: IOfficeRepository,
        default_tax_year: int = 2024,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.office_repo = office_repo
        self.default_tax_year = default_tax_year
        self._clock = clock

    async def create_office(
        self, name: str, slug: str | None = None, **details: Any
    ) -> OfficeResult:
        """Create an office. Raises OfficeSlugTakenException for a duplicate slug."""
        fields = clean_office_fields({"name": name, "slug": slug, **details})
        fields.setdefault("default_tax_year", self.default_tax_year)
        fields.setdefault("is_active", True)
        now = self._clock()
        office = OfficeResult(id=generate_cuid(), created_at=now, updated_at=now, **fields)
        return await self.office_repo.create(office)

    async def get_office(self, office_id: str) -> OfficeResult:
        """Return the office. Raises OfficeNotFoundException."""
        office = await self.office_repo.get_by_id(office_id)
        if office is None:
            raise OfficeNotFoundException(office_id)
        return office

    async def get_office_by_slug(self, slug: str) -> OfficeResult | None:
        """Return the office for a subdomain slug (trimmed, any case), or None."""
        try:
            normalized = OfficeSlug.normalize(slug)
        except ValidationException:
            return None
        return await self.office_repo.get_by_slug(normalized.value)

    async def list_offices(self, active_only: bool = False) -> list[OfficeResult]:
        return await self.office_repo.list_offices(active_only=active_only)

    async def update_office(self, office_id: str, changes: Mapping[str, Any]) -> OfficeResult:
        """Apply a partial update. Raises OfficeNotFoundException, OfficeSlugTakenException."""
        cleaned = clean_office_fields(changes)
        if not cleaned:
            return await self.get_office(office_id)
        updated = await self.office_repo.update(office_id, cleaned, self._clock())
        if updated is None:
            raise OfficeNotFoundException(office_id)
        return updated

    async def deactivate_office(self, office_id: str) -> OfficeResult:
        return await self.update_office(office_id, {"is_active": False})
