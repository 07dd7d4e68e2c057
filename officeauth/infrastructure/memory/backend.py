"""Bundle of in-memory stores shared by every request of one process."""

from dataclasses import dataclass, field

from officeauth.infrastructure.memory.audit import InMemoryRoleAuditTrail
from officeauth.infrastructure.memory.branding import InMemoryBrandingStore
from officeauth.infrastructure.memory.credentials import InMemoryCredentialStore
from officeauth.infrastructure.memory.offices import InMemoryOfficeRepository
from officeauth.infrastructure.memory.overrides import InMemoryOverrideStore
from officeauth.infrastructure.memory.tokens import InMemoryTokenStore


@dataclass
class MemoryBackend:
    """All stores for the memory storage backend (kept on app.state)."""

    overrides: InMemoryOverrideStore = field(default_factory=InMemoryOverrideStore)
    tokens: InMemoryTokenStore = field(default_factory=InMemoryTokenStore)
    branding: InMemoryBrandingStore = field(default_factory=InMemoryBrandingStore)
    offices: InMemoryOfficeRepository = field(default_factory=InMemoryOfficeRepository)
    credentials: InMemoryCredentialStore = field(default_factory=InMemoryCredentialStore)
    audit: InMemoryRoleAuditTrail = field(default_factory=InMemoryRoleAuditTrail)
