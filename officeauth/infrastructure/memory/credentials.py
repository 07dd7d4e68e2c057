"""In-memory credential store (user accounts)."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from officeauth.application.dtos.account import AccountRecord
from officeauth.domain.exceptions import AccountAlreadyExistsException


class InMemoryCredentialStore:
    """Accounts keyed by id with a unique email index."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[str, AccountRecord] = {}
        self._by_email: dict[str, str] = {}

    async def create(self, record: AccountRecord) -> AccountRecord:
        with self._lock:
            if record.email in self._by_email:
                raise AccountAlreadyExistsException()
            self._accounts[record.id] = record
            self._by_email[record.email] = record.id
            return record

    async def get_by_id(self, user_id: str) -> AccountRecord | None:
        with self._lock:
            return self._accounts.get(user_id)

    async def get_by_email(self, email: str) -> AccountRecord | None:
        with self._lock:
            user_id = self._by_email.get(email)
            return self._accounts.get(user_id) if user_id else None

    async def update(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> AccountRecord | None:
        with self._lock:
            current = self._accounts.get(user_id)
            if current is None:
                return None
            new_email = changes.get("email", current.email)
            if new_email != current.email:
                if new_email in self._by_email:
                    raise AccountAlreadyExistsException()
                del self._by_email[current.email]
                self._by_email[new_email] = user_id
            updated = replace(current, updated_at=now, **changes)
            self._accounts[user_id] = updated
            return updated
