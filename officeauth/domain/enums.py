"""Domain enumerations.

Enums represent fixed sets of domain values (roles, token kinds, account
status). Role is closed: values outside the enum are invalid input.
"""

from enum import Enum

from officeauth.domain.exceptions import InvalidRoleException


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """User role. Determines baseline access; admin and super_admin bypass checks."""

    CLIENT = "client"
    AGENT = "agent"
    TAX_OFFICE = "tax_office"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        """Return the Role for value; raise InvalidRoleException for unknown values.

        Never maps an unknown value to a fallback role.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRoleException(str(value)) from None


class TokenKind(_ValuesMixin, str, Enum):
    """Purpose of a single-use account token."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


class TokenStatus(_ValuesMixin, str, Enum):
    """Outcome of validating or consuming a token."""

    VALID = "valid"
    EXPIRED = "expired"
    ALREADY_USED = "already_used"
    NOT_FOUND = "not_found"


class AccountStatus(_ValuesMixin, str, Enum):
    """Account lifecycle. Scrubbed accounts keep their row with identifying fields cleared."""

    ACTIVE = "active"
    DEACTIVATED = "deactivated"
    SCRUBBED = "scrubbed"


class Theme(_ValuesMixin, str, Enum):
    """Default UI theme an office presents."""

    LIGHT = "light"
    DARK = "dark"


class RoleAuditAction(_ValuesMixin, str, Enum):
    """Kinds of entries in the role audit trail."""

    OVERRIDE_SET = "permission.override"
    OVERRIDE_CLEARED = "permission.override_cleared"
    ROLE_CHANGED = "user.role_change"
