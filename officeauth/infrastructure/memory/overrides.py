"""In-memory role permission overrides."""

from __future__ import annotations

import threading
from collections.abc import Mapping

from officeauth.application.dtos.permission import OverrideChange
from officeauth.domain.enums import Role


class InMemoryOverrideStore:
    """Overrides keyed by role. Each role's map is replaced whole on write."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._overrides: dict[Role, dict[str, bool]] = {}

    async def get_overrides(self, role: Role) -> dict[str, bool]:
        with self._lock:
            return dict(self._overrides.get(role, {}))

    async def snapshot(self) -> dict[Role, dict[str, bool]]:
        with self._lock:
            return {role: dict(values) for role, values in self._overrides.items()}

    async def apply(
        self, role: Role, changes: Mapping[str, bool | None]
    ) -> list[OverrideChange]:
        applied: list[OverrideChange] = []
        with self._lock:
            current = dict(self._overrides.get(role, {}))
            for slug, granted in changes.items():
                previous = current.get(slug)
                if granted is None:
                    if slug not in current:
                        continue
                    del current[slug]
                elif previous == granted:
                    continue
                else:
                    current[slug] = granted
                applied.append(OverrideChange(slug=slug, previous=previous, granted=granted))
            self._overrides[role] = current
        return applied
