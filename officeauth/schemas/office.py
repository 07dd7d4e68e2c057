"""Office (tenant) API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OfficeCreateRequest(BaseModel):
    """Request body for creating an office."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    zip_code: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    default_tax_year: int | None = Field(default=None, ge=1900, le=2100)


class OfficeUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    zip_code: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    default_tax_year: int | None = Field(default=None, ge=1900, le=2100)
    is_active: bool | None = None


class OfficeResponse(BaseModel):
    """Office response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str | None
    address: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    phone: str | None
    email: str | None
    default_tax_year: int
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
