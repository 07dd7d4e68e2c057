"""DTOs for the token lifecycle (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from officeauth.domain.enums import TokenKind, TokenStatus


@dataclass(frozen=True)
class TokenRecord:
    """Stored single-use token. Replaced (never mutated) when used or re-sent."""

    token: str
    kind: TokenKind
    user_id: str
    expires_at: datetime
    email: str | None = None
    used_at: datetime | None = None
    resend_count: int = 0
    created_at: datetime | None = None

    def status_at(self, now: datetime) -> TokenStatus:
        """Status of this token at now.

        Used is a permanent fact and reported before expiry, which is derived
        from the clock. A token is never valid at or after expires_at.
        """
        if self.used_at is not None:
            return TokenStatus.ALREADY_USED
        if now >= self.expires_at:
            return TokenStatus.EXPIRED
        return TokenStatus.VALID


@dataclass(frozen=True)
class IssuedToken:
    """What the email/SMS layer needs to build a verification or reset link."""

    token: str
    kind: TokenKind
    user_id: str
    expires_at: datetime
    email: str | None = None
    resend_count: int = 0


@dataclass(frozen=True)
class TokenValidation:
    """Result of validate(); record is None when status is NOT_FOUND."""

    status: TokenStatus
    record: TokenRecord | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == TokenStatus.VALID


@dataclass(frozen=True)
class TokenConsumption:
    """Result of consume(). consumed is True for exactly one caller per token."""

    consumed: bool
    status: TokenStatus
    record: TokenRecord | None = None
