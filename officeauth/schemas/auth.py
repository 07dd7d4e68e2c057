"""Auth and account recovery API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from officeauth.domain.enums import AccountStatus, Role, TokenKind, TokenStatus


class RegisterRequest(BaseModel):
    """Request body for public registration. New accounts are clients."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    office_slug: str | None = Field(
        default=None, description="Subdomain slug of the office the client signs up with"
    )


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenRequest(BaseModel):
    """Body carrying an emailed account token."""

    token: str = Field(..., min_length=1, max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Request body for POST /auth/reset-password."""

    token: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, description="New password (min 8 characters)")


class AccountResponse(BaseModel):
    """Account response (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: Role
    status: AccountStatus
    office_id: str | None
    first_name: str | None
    last_name: str | None
    email_verified_at: datetime | None


class LoginResponse(BaseModel):
    """JWT session token plus the account it belongs to."""

    access_token: str
    token_type: str = "bearer"
    account: AccountResponse


class RegisterResponse(BaseModel):
    """New account; the verification link is delivered out of band."""

    account: AccountResponse
    verification_expires_at: datetime


class TokenSentResponse(BaseModel):
    """Acknowledgement that a token link was (or would have been) sent."""

    message: str
    expires_at: datetime | None = None
    resend_count: int | None = None


class TokenStatusResponse(BaseModel):
    """Result of checking a token without redeeming it."""

    status: TokenStatus
    kind: TokenKind | None = None
    expires_at: datetime | None = None


class MessageResponse(BaseModel):
    message: str
