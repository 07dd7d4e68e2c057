"""Ports (Protocols) implemented by the memory and postgres backends."""

from officeauth.application.interfaces.repositories import (
    IBrandingStore,
    ICredentialStore,
    IOfficeRepository,
    IOverrideStore,
    IRoleAuditTrail,
    ITokenStore,
)
from officeauth.application.interfaces.services import IPasswordHasher

__all__ = [
    "IBrandingStore",
    "ICredentialStore",
    "IOfficeRepository",
    "IOverrideStore",
    "IPasswordHasher",
    "IRoleAuditTrail",
    "ITokenStore",
]
