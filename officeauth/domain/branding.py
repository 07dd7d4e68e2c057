"""Office branding: the platform default identity and branding field rules.

Every office without its own branding presents the platform identity. An
office with partial branding falls back to the platform value field by
field, so an office can set its company name before uploading a logo
without ever rendering an empty name or palette. The platform identity
itself carries no logo.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from officeauth.domain.enums import Theme
from officeauth.domain.exceptions import ValidationException
from officeauth.domain.value_objects import HexColor, normalize_email


@dataclass(frozen=True)
class BrandingIdentity:
    """A display identity; every field but the logo is set."""

    company_name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    default_theme: Theme
    reply_to_email: str
    reply_to_name: str
    logo_url: str | None = None


PLATFORM_BRANDING = BrandingIdentity(
    company_name="STS TaxRepair",
    primary_color="#1a4d2e",
    secondary_color="#4CAF50",
    accent_color="#22c55e",
    default_theme=Theme.LIGHT,
    reply_to_email="Info.ststax@gmail.com",
    reply_to_name="STS TaxRepair Support",
)

# Fields an office may customise; each one falls back independently.
BRANDING_FIELDS: tuple[str, ...] = (
    "company_name",
    "logo_url",
    "primary_color",
    "secondary_color",
    "accent_color",
    "default_theme",
    "reply_to_email",
    "reply_to_name",
)

_COLOR_FIELDS = frozenset({"primary_color", "secondary_color", "accent_color"})
_MAX_TEXT_LENGTH = {
    "company_name": 255,
    "logo_url": 500,
    "reply_to_email": 255,
    "reply_to_name": 255,
}


def clean_branding_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalize a partial branding update.

    Keys missing from changes are left alone by the caller; a key mapped to
    None (or a blank string) clears the field so it falls back to the
    platform default.

    Raises:
        ValidationException: Unknown key, malformed color, theme, or email.
    """
    unknown = sorted(set(changes) - set(BRANDING_FIELDS))
    if unknown:
        raise ValidationException(
            "Unknown branding field(s): " + ", ".join(unknown), field=unknown[0]
        )
    cleaned: dict[str, Any] = {}
    for key, raw in changes.items():
        value = raw.strip() if isinstance(raw, str) else raw
        if value is None or value == "":
            cleaned[key] = None
            continue
        if key in _COLOR_FIELDS:
            try:
                HexColor(value)
            except ValidationException as exc:
                raise ValidationException(exc.message, field=key) from None
        elif key == "default_theme":
            try:
                value = Theme(value)
            except ValueError:
                raise ValidationException(
                    f"default_theme must be one of {Theme.values()}", field=key
                ) from None
        elif key == "reply_to_email":
            try:
                value = normalize_email(value)
            except ValidationException as exc:
                raise ValidationException(exc.message, field=key) from None
        if isinstance(value, str) and len(value) > _MAX_TEXT_LENGTH.get(key, 255):
            raise ValidationException(f"{key} is too long", field=key)
        cleaned[key] = value
    return cleaned
