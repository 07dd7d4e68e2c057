"""Office branding store (Postgres). One row per office, merged with INSERT ... ON CONFLICT."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.dtos.branding import BrandingRecord
from officeauth.domain.enums import Theme
from officeauth.infrastructure.persistence.models.branding import OfficeBranding
from officeauth.shared.utils.datetime import ensure_utc
from officeauth.shared.utils.generators import generate_cuid

_COLUMNS = (
    OfficeBranding.office_id,
    OfficeBranding.company_name,
    OfficeBranding.logo_url,
    OfficeBranding.primary_color,
    OfficeBranding.secondary_color,
    OfficeBranding.accent_color,
    OfficeBranding.default_theme,
    OfficeBranding.reply_to_email,
    OfficeBranding.reply_to_name,
    OfficeBranding.updated_by_user_id,
    OfficeBranding.created_at,
    OfficeBranding.updated_at,
)


def _row_to_record(row: Any) -> BrandingRecord:
    """Map a branding row to BrandingRecord."""
    return BrandingRecord(
        office_id=row.office_id,
        company_name=row.company_name,
        logo_url=row.logo_url,
        primary_color=row.primary_color,
        secondary_color=row.secondary_color,
        accent_color=row.accent_color,
        default_theme=Theme(row.default_theme) if row.default_theme else None,
        reply_to_email=row.reply_to_email,
        reply_to_name=row.reply_to_name,
        updated_by_user_id=row.updated_by_user_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class BrandingRepository:
    """IBrandingStore over office_branding."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, office_id: str) -> BrandingRecord | None:
        result = await self.db.execute(
            select(*_COLUMNS).where(OfficeBranding.office_id == office_id)
        )
        row = result.one_or_none()
        return _row_to_record(row) if row else None

    async def upsert(
        self,
        office_id: str,
        changes: Mapping[str, Any],
        actor_id: str | None,
        now: datetime,
    ) -> BrandingRecord:
        values = {k: (v.value if isinstance(v, Enum) else v) for k, v in changes.items()}
        stmt = pg_insert(OfficeBranding).values(
            id=generate_cuid(),
            office_id=office_id,
            updated_by_user_id=actor_id,
            created_at=now,
            updated_at=now,
            **values,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["office_id"],
            set_={
                **{key: stmt.excluded[key] for key in values},
                "updated_by_user_id": stmt.excluded.updated_by_user_id,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(*_COLUMNS)
        row = (await self.db.execute(stmt)).one()
        return _row_to_record(row)

    async def delete(self, office_id: str) -> bool:
        result = await self.db.execute(
            delete(OfficeBranding)
            .where(OfficeBranding.office_id == office_id)
            .execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)
