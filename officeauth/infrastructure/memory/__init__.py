"""In-process storage backend.

Each store guards its state with a threading.Lock that is never held
across an await, so the stores are safe for coroutines on one loop and
for worker threads running their own loops. Records are immutable
dataclasses replaced whole, so a reader never sees a half-applied write.
"""

from officeauth.infrastructure.memory.audit import InMemoryRoleAuditTrail
from officeauth.infrastructure.memory.backend import MemoryBackend
from officeauth.infrastructure.memory.branding import InMemoryBrandingStore
from officeauth.infrastructure.memory.credentials import InMemoryCredentialStore
from officeauth.infrastructure.memory.offices import InMemoryOfficeRepository
from officeauth.infrastructure.memory.overrides import InMemoryOverrideStore
from officeauth.infrastructure.memory.tokens import InMemoryTokenStore

__all__ = [
    "InMemoryBrandingStore",
    "InMemoryCredentialStore",
    "InMemoryOfficeRepository",
    "InMemoryOverrideStore",
    "InMemoryRoleAuditTrail",
    "InMemoryTokenStore",
    "MemoryBackend",
]
