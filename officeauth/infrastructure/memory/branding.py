"""In-memory office branding store."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from officeauth.application.dtos.branding import BrandingRecord


class InMemoryBrandingStore:
    """One immutable BrandingRecord per office, swapped whole on upsert."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, BrandingRecord] = {}

    async def get(self, office_id: str) -> BrandingRecord | None:
        with self._lock:
            return self._records.get(office_id)

    async def upsert(
        self,
        office_id: str,
        changes: Mapping[str, Any],
        actor_id: str | None,
        now: datetime,
    ) -> BrandingRecord:
        with self._lock:
            current = self._records.get(office_id)
            if current is None:
                record = BrandingRecord(
                    office_id=office_id,
                    updated_by_user_id=actor_id,
                    created_at=now,
                    updated_at=now,
                    **changes,
                )
            else:
                record = replace(
                    current, updated_by_user_id=actor_id, updated_at=now, **changes
                )
            self._records[office_id] = record
            return record

    async def delete(self, office_id: str) -> bool:
        with self._lock:
            return self._records.pop(office_id, None) is not None
