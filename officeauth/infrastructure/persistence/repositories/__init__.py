"""Postgres implementations of the application ports. Each takes an AsyncSession."""

from officeauth.infrastructure.persistence.repositories.branding_repo import (
    BrandingRepository,
)
from officeauth.infrastructure.persistence.repositories.office_repo import OfficeRepository
from officeauth.infrastructure.persistence.repositories.override_repo import (
    OverrideRepository,
)
from officeauth.infrastructure.persistence.repositories.role_audit_repo import (
    RoleAuditRepository,
)
from officeauth.infrastructure.persistence.repositories.token_repo import TokenRepository
from officeauth.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BrandingRepository",
    "OfficeRepository",
    "OverrideRepository",
    "RoleAuditRepository",
    "TokenRepository",
    "UserRepository",
]
