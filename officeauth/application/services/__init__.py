"""Application services: the authorization and tenant-identity core."""

from officeauth.application.services.account_service import AccountService
from officeauth.application.services.branding_resolver import BrandingResolver
from officeauth.application.services.office_registry import OfficeRegistry
from officeauth.application.services.permission_engine import PermissionEngine
from officeauth.application.services.token_lifecycle import TokenLifecycleManager

__all__ = [
    "AccountService",
    "BrandingResolver",
    "OfficeRegistry",
    "PermissionEngine",
    "TokenLifecycleManager",
]
