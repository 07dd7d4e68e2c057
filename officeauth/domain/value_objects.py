"""Domain value objects.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

from officeauth.domain.exceptions import ValidationException

# Lowercase alphanumeric with optional inner hyphens (e.g. acme-tax).
_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
# Deliberately loose: the API layer validates with EmailStr.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class OfficeSlug:
    """Subdomain-style office identifier (e.g. 'acmetax' for acmetax.example.org).

    Normalized to lowercase and trimmed; 2-100 characters.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValidationException("Office slug must be a non-empty string", field="slug")
        if len(self.value) < 2 or len(self.value) > 100:
            raise ValidationException("Office slug must be 2-100 characters", field="slug")
        if not _SLUG_RE.match(self.value):
            raise ValidationException(
                "Office slug must be lowercase alphanumeric with optional hyphens "
                "(e.g., 'acme', 'acme-tax')",
                field="slug",
            )

    @classmethod
    def normalize(cls, raw: str) -> "OfficeSlug":
        """Trim and lowercase raw before validating."""
        return cls((raw or "").strip().lower())


@dataclass(frozen=True)
class HexColor:
    """CSS hex color (#rgb or #rrggbb)."""

    value: str

    def __post_init__(self) -> None:
        if not _HEX_COLOR_RE.match(self.value or ""):
            raise ValidationException(
                f"Invalid color {self.value!r}; expected #rgb or #rrggbb"
            )


def normalize_email(value: str) -> str:
    """Trim and lowercase an email address; raise ValidationException if malformed."""
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationException("Invalid email address", field="email")
    return email
