"""In-memory office repository."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from officeauth.application.dtos.office import OfficeResult
from officeauth.domain.exceptions import OfficeSlugTakenException


class InMemoryOfficeRepository:
    """Offices keyed by id; slug uniqueness is checked under the lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._offices: dict[str, OfficeResult] = {}

    def _slug_owner(self, slug: str | None) -> str | None:
        if slug is None:
            return None
        for office in self._offices.values():
            if office.slug == slug:
                return office.id
        return None

    async def create(self, office: OfficeResult) -> OfficeResult:
        with self._lock:
            if self._slug_owner(office.slug) is not None:
                raise OfficeSlugTakenException(office.slug)
            self._offices[office.id] = office
            return office

    async def get_by_id(self, office_id: str) -> OfficeResult | None:
        with self._lock:
            return self._offices.get(office_id)

    async def get_by_slug(self, slug: str) -> OfficeResult | None:
        with self._lock:
            owner = self._slug_owner(slug)
            return self._offices[owner] if owner else None

    async def list_offices(self, active_only: bool = False) -> list[OfficeResult]:
        with self._lock:
            offices = list(self._offices.values())
        if active_only:
            offices = [o for o in offices if o.is_active]
        return sorted(offices, key=lambda o: (o.name.lower(), o.id))

    async def update(
        self, office_id: str, changes: Mapping[str, Any], now: datetime
    ) -> OfficeResult | None:
        with self._lock:
            current = self._offices.get(office_id)
            if current is None:
                return None
            slug = changes.get("slug", current.slug)
            owner = self._slug_owner(slug)
            if owner is not None and owner != office_id:
                raise OfficeSlugTakenException(slug)
            updated = replace(current, updated_at=now, **changes)
            self._offices[office_id] = updated
            return updated
