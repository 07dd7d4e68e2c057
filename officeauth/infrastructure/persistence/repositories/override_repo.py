"""Role permission override store (Postgres)."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from officeauth.application.dtos.permission import OverrideChange
from officeauth.domain.enums import Role
from officeauth.infrastructure.persistence.models.permission_override import (
    RolePermissionOverride,
)
from officeauth.shared.utils.generators import generate_cuid


class OverrideRepository:
    """IOverrideStore over role_permission_override.

    apply locks the affected rows, then writes every change with one upsert
    and one delete inside the caller's transaction (transactional_session).
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_overrides(self, role: Role) -> dict[str, bool]:
        result = await self.db.execute(
            select(RolePermissionOverride.permission_slug, RolePermissionOverride.granted)
            .where(RolePermissionOverride.role == role.value)
        )
        return {slug: granted for slug, granted in result.all()}

    async def snapshot(self) -> dict[Role, dict[str, bool]]:
        result = await self.db.execute(
            select(
                RolePermissionOverride.role,
                RolePermissionOverride.permission_slug,
                RolePermissionOverride.granted,
            )
        )
        overrides: dict[Role, dict[str, bool]] = {}
        for role, slug, granted in result.all():
            overrides.setdefault(Role(role), {})[slug] = granted
        return overrides

    async def apply(
        self, role: Role, changes: Mapping[str, bool | None]
    ) -> list[OverrideChange]:
        result = await self.db.execute(
            select(RolePermissionOverride.permission_slug, RolePermissionOverride.granted)
            .where(RolePermissionOverride.role == role.value)
            .where(RolePermissionOverride.permission_slug.in_(list(changes)))
            .with_for_update()
        )
        current = {slug: granted for slug, granted in result.all()}

        applied: list[OverrideChange] = []
        upserts: list[dict[str, object]] = []
        cleared: list[str] = []
        for slug, granted in changes.items():
            previous = current.get(slug)
            if granted is None:
                if slug not in current:
                    continue
                cleared.append(slug)
            elif previous == granted:
                continue
            else:
                upserts.append(
                    {
                        "id": generate_cuid(),
                        "role": role.value,
                        "permission_slug": slug,
                        "granted": granted,
                    }
                )
            applied.append(OverrideChange(slug=slug, previous=previous, granted=granted))

        if upserts:
            stmt = pg_insert(RolePermissionOverride).values(upserts)
            stmt = stmt.on_conflict_do_update(
                index_elements=["role", "permission_slug"],
                set_={"granted": stmt.excluded.granted, "updated_at": func.now()},
            )
            await self.db.execute(stmt)
        if cleared:
            await self.db.execute(
                delete(RolePermissionOverride)
                .where(RolePermissionOverride.role == role.value)
                .where(RolePermissionOverride.permission_slug.in_(cleared))
                .execution_options(synchronize_session=False)
            )
        return applied
