"""In-memory account token store."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from officeauth.application.dtos.token import TokenRecord
from officeauth.domain.enums import TokenKind


class InMemoryTokenStore:
    """Tokens keyed by token string. mark_used is a compare-and-set under the lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, TokenRecord] = {}

    async def insert(self, record: TokenRecord) -> None:
        with self._lock:
            if record.token in self._tokens:
                raise ValueError("Token already exists")
            self._tokens[record.token] = record

    async def get(self, token: str) -> TokenRecord | None:
        with self._lock:
            return self._tokens.get(token)

    async def mark_used(
        self, token: str, now: datetime, kind: TokenKind | None = None
    ) -> TokenRecord | None:
        with self._lock:
            record = self._tokens.get(token)
            if record is None or record.used_at is not None or record.expires_at <= now:
                return None
            if kind is not None and record.kind != kind:
                return None
            used = replace(record, used_at=now)
            self._tokens[token] = used
            return used

    async def increment_resend_count(self, token: str) -> int | None:
        with self._lock:
            record = self._tokens.get(token)
            if record is None:
                return None
            updated = replace(record, resend_count=record.resend_count + 1)
            self._tokens[token] = updated
            return updated.resend_count

    async def latest_active(
        self, user_id: str, kind: TokenKind, now: datetime
    ) -> TokenRecord | None:
        with self._lock:
            candidates = [
                r
                for r in self._tokens.values()
                if r.user_id == user_id
                and r.kind == kind
                and r.used_at is None
                and r.expires_at > now
            ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: (r.created_at or r.expires_at, r.expires_at))

    async def delete_expired_or_used(self, now: datetime) -> int:
        with self._lock:
            stale = [
                token
                for token, r in self._tokens.items()
                if r.used_at is not None or r.expires_at <= now
            ]
            for token in stale:
                del self._tokens[token]
        return len(stale)

    async def delete_for_user(self, user_id: str) -> int:
        with self._lock:
            owned = [token for token, r in self._tokens.items() if r.user_id == user_id]
            for token in owned:
                del self._tokens[token]
        return len(owned)
