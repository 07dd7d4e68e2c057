"""Office repository (Postgres). Returns application DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.dtos.office import OfficeResult
from officeauth.domain.exceptions import OfficeSlugTakenException
from officeauth.infrastructure.persistence.models.office import Office
from officeauth.infrastructure.persistence.repositories.base import BaseRepository
from officeauth.shared.utils.datetime import ensure_utc


def _office_to_result(o: Office) -> OfficeResult:
    """Map ORM Office to application OfficeResult."""
    return OfficeResult(
        id=o.id,
        name=o.name,
        slug=o.slug,
        default_tax_year=o.default_tax_year,
        is_active=o.is_active,
        address=o.address,
        city=o.city,
        state=o.state,
        zip_code=o.zip_code,
        phone=o.phone,
        email=o.email,
        created_at=ensure_utc(o.created_at),
        updated_at=ensure_utc(o.updated_at),
    )


class OfficeRepository(BaseRepository[Office]):
    """IOfficeRepository over the office table. Slug uniqueness is a DB constraint."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Office)

    async def create(self, office: OfficeResult) -> OfficeResult:
        row = Office(
            id=office.id,
            name=office.name,
            slug=office.slug,
            address=office.address,
            city=office.city,
            state=office.state,
            zip_code=office.zip_code,
            phone=office.phone,
            email=office.email,
            default_tax_year=office.default_tax_year,
            is_active=office.is_active,
        )
        try:
            created = await self.add(row)
        except IntegrityError:
            raise OfficeSlugTakenException(office.slug or "") from None
        return _office_to_result(created)

    async def get_by_id(self, office_id: str) -> OfficeResult | None:
        row = await self.get_entity(office_id)
        return _office_to_result(row) if row else None

    async def get_by_slug(self, slug: str) -> OfficeResult | None:
        result = await self.db.execute(select(Office).where(Office.slug == slug))
        row = result.scalar_one_or_none()
        return _office_to_result(row) if row else None

    async def list_offices(self, active_only: bool = False) -> list[OfficeResult]:
        stmt = select(Office).order_by(Office.name, Office.id)
        if active_only:
            stmt = stmt.where(Office.is_active.is_(True))
        result = await self.db.execute(stmt)
        return [_office_to_result(o) for o in result.scalars().all()]

    async def update(
        self, office_id: str, changes: Mapping[str, Any], now: datetime
    ) -> OfficeResult | None:
        row = await self.get_entity(office_id)
        if row is None:
            return None
        for key, value in changes.items():
            setattr(row, key, value)
        row.updated_at = now
        try:
            saved = await self.save(row)
        except IntegrityError:
            raise OfficeSlugTakenException(str(changes.get("slug"))) from None
        return _office_to_result(saved)
