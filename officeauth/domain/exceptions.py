"""Domain exceptions for officeauth.

Defines domain-level exceptions that represent invalid input and business
rule violations. These exceptions are independent of infrastructure
concerns. The presentation layer maps them to HTTP responses in exception
handlers (see officeauth.core.exception_handlers).

Token outcomes (expired, already used, not found) are normally returned as
a TokenStatus; the exceptions below exist for flows that must stop, such as
verify_email and reset_password.
"""

from typing import Any


class OfficeAuthException(Exception):
    """Base exception for all officeauth errors.

    All custom exceptions inherit from this class so handlers can map them
    consistently using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by API error responses."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(OfficeAuthException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidRoleException(OfficeAuthException):
    """Raised for a role value outside the closed Role enumeration."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"Unknown role: {role!r}",
            "INVALID_ROLE",
            {"role": role},
        )


class UnknownPermissionException(OfficeAuthException):
    """Raised when an override names a permission slug that is not in the policy."""

    def __init__(self, slugs: list[str]) -> None:
        super().__init__(
            "Unknown permission: " + ", ".join(sorted(slugs)),
            "UNKNOWN_PERMISSION",
            {"slugs": sorted(slugs)},
        )


class PrivilegedRoleException(OfficeAuthException):
    """Raised when an override targets admin or super_admin (always granted everything)."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"Permission overrides are not applicable to role '{role}'",
            "ROLE_NOT_CONFIGURABLE",
            {"role": role},
        )


class InvalidTokenException(OfficeAuthException):
    """Raised for a malformed token string (rejected before any lookup)."""

    def __init__(self) -> None:
        super().__init__("Malformed token", "INVALID_TOKEN")


class TokenNotFoundException(OfficeAuthException):
    """Raised when a token is not in the store (or belongs to another flow)."""

    def __init__(self) -> None:
        super().__init__("Token not found", "TOKEN_NOT_FOUND")


class TokenExpiredException(OfficeAuthException):
    """Raised when a token is past its expiry. Not retryable; request a new one."""

    def __init__(self) -> None:
        super().__init__("Token has expired; request a new one", "TOKEN_EXPIRED")


class TokenAlreadyUsedException(OfficeAuthException):
    """Raised when a token was already consumed (including losing a concurrent race)."""

    def __init__(self) -> None:
        super().__init__("Token has already been used", "TOKEN_ALREADY_USED")


class ResendLimitExceededException(OfficeAuthException):
    """Raised when a verification email was re-sent too many times."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Verification email resend limit reached ({limit})",
            "RESEND_LIMIT_EXCEEDED",
            {"limit": limit},
        )


class AuthenticationException(OfficeAuthException):
    """Raised when authentication fails (e.g. invalid credentials or session token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(OfficeAuthException):
    """Raised when the caller's role lacks the permission required for the operation."""

    def __init__(
        self,
        permission: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional permission slug and message.

        Args:
            permission: Slug that was required (e.g. 'admin.permissions').
            message: Human-readable message; default used when permission omitted.
        """
        if permission:
            message = f"Permission denied: {permission}"
        details = {"permission": permission} if permission else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(OfficeAuthException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class OfficeNotFoundException(OfficeAuthException):
    """Raised when a requested office (tenant) is not found."""

    def __init__(self, office_id: str) -> None:
        super().__init__(
            f"Office not found: {office_id}",
            "OFFICE_NOT_FOUND",
            {"office_id": office_id},
        )


class OfficeSlugTakenException(OfficeAuthException):
    """Raised when creating or renaming an office to a slug that is already used."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"Office with slug '{slug}' already exists",
            "OFFICE_SLUG_TAKEN",
            {"slug": slug},
        )


class AccountAlreadyExistsException(OfficeAuthException):
    """Raised when registering an email that already has an account."""

    def __init__(self) -> None:
        super().__init__("Email is already registered", "ACCOUNT_EXISTS")


class SqlNotConfiguredException(OfficeAuthException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
