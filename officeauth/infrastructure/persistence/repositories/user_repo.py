"""User repository (Postgres Credential Store). Returns application DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.dtos.account import AccountRecord
from officeauth.domain.enums import AccountStatus, Role
from officeauth.domain.exceptions import AccountAlreadyExistsException
from officeauth.infrastructure.persistence.models.user import User
from officeauth.infrastructure.persistence.repositories.base import BaseRepository
from officeauth.shared.utils.datetime import ensure_utc


def _user_to_record(u: User) -> AccountRecord:
    """Map ORM User to application AccountRecord."""
    return AccountRecord(
        id=u.id,
        email=u.email,
        role=Role(u.role),
        status=AccountStatus(u.status),
        password_hash=u.password_hash,
        office_id=u.office_id,
        first_name=u.first_name,
        last_name=u.last_name,
        phone=u.phone,
        email_verified_at=ensure_utc(u.email_verified_at),
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


class UserRepository(BaseRepository[User]):
    """ICredentialStore over app_user."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def create(self, record: AccountRecord) -> AccountRecord:
        row = User(
            id=record.id,
            email=record.email,
            password_hash=record.password_hash,
            first_name=record.first_name,
            last_name=record.last_name,
            phone=record.phone,
            role=record.role.value,
            office_id=record.office_id,
            status=record.status.value,
            email_verified_at=record.email_verified_at,
        )
        try:
            created = await self.add(row)
        except IntegrityError:
            raise AccountAlreadyExistsException() from None
        return _user_to_record(created)

    async def get_by_id(self, user_id: str) -> AccountRecord | None:
        row = await self.get_entity(user_id)
        return _user_to_record(row) if row else None

    async def get_by_email(self, email: str) -> AccountRecord | None:
        result = await self.db.execute(select(User).where(User.email == email))
        row = result.scalar_one_or_none()
        return _user_to_record(row) if row else None

    async def update(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> AccountRecord | None:
        row = await self.get_entity(user_id)
        if row is None:
            return None
        for key, value in changes.items():
            setattr(row, key, value.value if isinstance(value, Enum) else value)
        row.updated_at = now
        try:
            saved = await self.save(row)
        except IntegrityError:
            raise AccountAlreadyExistsException() from None
        return _user_to_record(saved)
