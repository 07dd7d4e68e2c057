"""DTOs for office branding."""

from dataclasses import dataclass
from datetime import datetime

from officeauth.domain.enums import Theme


@dataclass(frozen=True)
class BrandingRecord:
    """Stored branding for one office. None means "use the platform default"."""

    office_id: str
    company_name: str | None = None
    logo_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    default_theme: Theme | None = None
    reply_to_email: str | None = None
    reply_to_name: str | None = None
    updated_by_user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class BrandingView:
    """Effective identity for rendering; only the logo may be absent."""

    office_id: str | None
    is_custom: bool
    company_name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    default_theme: Theme
    reply_to_email: str
    reply_to_name: str
    logo_url: str | None = None
