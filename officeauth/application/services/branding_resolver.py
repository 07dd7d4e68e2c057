"""Branding resolver: the identity an office presents, with per-field platform fallback."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from officeauth.application.dtos.branding import BrandingRecord, BrandingView
from officeauth.application.interfaces.repositories import IBrandingStore, IOfficeRepository
from officeauth.domain.branding import (
    BRANDING_FIELDS,
    PLATFORM_BRANDING,
    BrandingIdentity,
    clean_branding_changes,
)
from officeauth.domain.exceptions import OfficeNotFoundException, ValidationException
from officeauth.domain.value_objects import OfficeSlug
from officeauth.shared.utils.datetime import utc_now


class BrandingResolver:
    """Resolves and edits office branding.

    resolve never fails for a missing office or record: the caller always
    gets a complete identity to render.
    """

    def __init__(
        self,
        branding_store: IBrandingStore,
        office_repo: IOfficeRepository,
        defaults: BrandingIdentity = PLATFORM_BRANDING,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.branding_store = branding_store
        self.office_repo = office_repo
        self.defaults = defaults
        self._clock = clock

    async def resolve(self, office_id: str | None = None) -> BrandingView:
        """Return the office's identity; unset fields (or no record) use the defaults."""
        record = await self.branding_store.get(office_id) if office_id else None
        return self._view(office_id, record)

    async def resolve_by_slug(self, slug: str) -> BrandingView:
        """Resolve branding for a subdomain slug; unknown slugs get the defaults."""
        try:
            normalized = OfficeSlug.normalize(slug)
        except ValidationException:
            return self._view(None, None)
        office = await self.office_repo.get_by_slug(normalized.value)
        if office is None:
            return self._view(None, None)
        return await self.resolve(office.id)

    async def upsert(
        self,
        office_id: str,
        changes: Mapping[str, Any],
        actor_id: str | None = None,
    ) -> BrandingView:
        """Create or merge the office's branding and return the resolved view.

        Keys absent from changes keep their stored value; a key set to None
        clears the field back to the default.

        Raises:
            ValidationException: Unknown field, bad color, theme or email.
            OfficeNotFoundException: office_id does not exist.
        """
        cleaned = clean_branding_changes(changes)
        if await self.office_repo.get_by_id(office_id) is None:
            raise OfficeNotFoundException(office_id)
        record = await self.branding_store.upsert(office_id, cleaned, actor_id, self._clock())
        return self._view(office_id, record)

    async def reset(self, office_id: str) -> bool:
        """Delete the office's branding; returns True if a record existed."""
        return await self.branding_store.delete(office_id)

    def _view(self, office_id: str | None, record: BrandingRecord | None) -> BrandingView:
        values = {
            name: (
                getattr(record, name)
                if record is not None and getattr(record, name) is not None
                else getattr(self.defaults, name)
            )
            for name in BRANDING_FIELDS
        }
        return BrandingView(office_id=office_id, is_custom=record is not None, **values)
