"""Branding API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from officeauth.domain.enums import Theme


class BrandingUpdateRequest(BaseModel):
    """Partial branding update.

    Fields left out of the body keep their value; fields sent as null are
    cleared and fall back to the platform default.
    """

    company_name: str | None = Field(default=None, max_length=255)
    logo_url: str | None = Field(default=None, max_length=500)
    primary_color: str | None = Field(default=None, max_length=20)
    secondary_color: str | None = Field(default=None, max_length=20)
    accent_color: str | None = Field(default=None, max_length=20)
    default_theme: Theme | None = None
    reply_to_email: str | None = Field(default=None, max_length=255)
    reply_to_name: str | None = Field(default=None, max_length=255)


class BrandingResponse(BaseModel):
    """Effective branding; only the logo may be null."""

    model_config = ConfigDict(from_attributes=True)

    office_id: str | None
    is_custom: bool
    company_name: str
    logo_url: str | None = None
    primary_color: str
    secondary_color: str
    accent_color: str
    default_theme: Theme
    reply_to_email: str
    reply_to_name: str
