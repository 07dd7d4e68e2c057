"""ORM models. Importing this package registers every table on Base.metadata."""

from officeauth.infrastructure.persistence.models.branding import OfficeBranding
from officeauth.infrastructure.persistence.models.office import Office
from officeauth.infrastructure.persistence.models.permission_override import (
    RolePermissionOverride,
)
from officeauth.infrastructure.persistence.models.role_audit_log import RoleAuditLog
from officeauth.infrastructure.persistence.models.token import AuthToken
from officeauth.infrastructure.persistence.models.user import User

__all__ = [
    "AuthToken",
    "Office",
    "OfficeBranding",
    "RoleAuditLog",
    "RolePermissionOverride",
    "User",
]
