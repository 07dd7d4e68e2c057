"""In-memory role audit trail (append-only)."""

from __future__ import annotations

import threading

from officeauth.application.dtos.audit import RoleAuditEntry
from officeauth.domain.enums import Role


class InMemoryRoleAuditTrail:
    """Entries kept in insertion order; there is no update or delete."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[RoleAuditEntry] = []

    async def append(self, entry: RoleAuditEntry) -> RoleAuditEntry:
        with self._lock:
            self._entries.append(entry)
        return entry

    async def list_entries(
        self, role: Role | None = None, limit: int = 100
    ) -> list[RoleAuditEntry]:
        with self._lock:
            entries = list(reversed(self._entries))
        if role is not None:
            entries = [e for e in entries if e.role == role]
        return entries[:limit]
