"""Account token store (Postgres).

Consumption is a single conditional UPDATE ... RETURNING, so the database
decides the one winner among concurrent consumers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.dtos.token import TokenRecord
from officeauth.domain.enums import TokenKind
from officeauth.infrastructure.persistence.models.token import AuthToken
from officeauth.shared.utils.datetime import ensure_utc

_COLUMNS = (
    AuthToken.token,
    AuthToken.kind,
    AuthToken.user_id,
    AuthToken.email,
    AuthToken.expires_at,
    AuthToken.used_at,
    AuthToken.resend_count,
    AuthToken.created_at,
)


def _row_to_record(row: Any) -> TokenRecord:
    """Map a token row (ORM object or column row) to TokenRecord."""
    return TokenRecord(
        token=row.token,
        kind=TokenKind(row.kind),
        user_id=row.user_id,
        email=row.email,
        expires_at=ensure_utc(row.expires_at),
        used_at=ensure_utc(row.used_at),
        resend_count=row.resend_count,
        created_at=ensure_utc(row.created_at),
    )


class TokenRepository:
    """ITokenStore over auth_token. Reads select columns so results never come from a stale identity map."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, record: TokenRecord) -> None:
        row = AuthToken(
            token=record.token,
            kind=record.kind.value,
            user_id=record.user_id,
            email=record.email,
            expires_at=record.expires_at,
            used_at=record.used_at,
            resend_count=record.resend_count,
        )
        if record.created_at is not None:
            row.created_at = record.created_at
        self.db.add(row)
        await self.db.flush()

    async def get(self, token: str) -> TokenRecord | None:
        result = await self.db.execute(select(*_COLUMNS).where(AuthToken.token == token))
        row = result.one_or_none()
        return _row_to_record(row) if row else None

    async def mark_used(
        self, token: str, now: datetime, kind: TokenKind | None = None
    ) -> TokenRecord | None:
        stmt = (
            update(AuthToken)
            .where(AuthToken.token == token)
            .where(AuthToken.used_at.is_(None))
            .where(AuthToken.expires_at > now)
        )
        if kind is not None:
            stmt = stmt.where(AuthToken.kind == kind.value)
        stmt = (
            stmt.values(used_at=now)
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        row = (await self.db.execute(stmt)).one_or_none()
        return _row_to_record(row) if row else None

    async def increment_resend_count(self, token: str) -> int | None:
        stmt = (
            update(AuthToken)
            .where(AuthToken.token == token)
            .values(resend_count=AuthToken.resend_count + 1)
            .returning(AuthToken.resend_count)
            .execution_options(synchronize_session=False)
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def latest_active(
        self, user_id: str, kind: TokenKind, now: datetime
    ) -> TokenRecord | None:
        result = await self.db.execute(
            select(*_COLUMNS)
            .where(AuthToken.user_id == user_id)
            .where(AuthToken.kind == kind.value)
            .where(AuthToken.used_at.is_(None))
            .where(AuthToken.expires_at > now)
            .order_by(AuthToken.created_at.desc())
            .limit(1)
        )
        row = result.first()
        return _row_to_record(row) if row else None

    async def delete_expired_or_used(self, now: datetime) -> int:
        result = await self.db.execute(
            delete(AuthToken)
            .where(or_(AuthToken.used_at.is_not(None), AuthToken.expires_at <= now))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.db.execute(
            delete(AuthToken)
            .where(AuthToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
