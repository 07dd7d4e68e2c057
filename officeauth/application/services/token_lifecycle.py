"""Single-use, expiring tokens for email verification and password reset.

A token is valid until it is consumed or expires, whichever comes first.
Consumption is a compare-and-set in the token store, so exactly one of any
number of concurrent consumers succeeds and the rest see already_used.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from officeauth.application.dtos.token import (
    IssuedToken,
    TokenConsumption,
    TokenRecord,
    TokenValidation,
)
from officeauth.application.interfaces.repositories import ICredentialStore, ITokenStore
from officeauth.domain.enums import TokenKind, TokenStatus
from officeauth.domain.exceptions import (
    InvalidTokenException,
    ResourceNotFoundException,
    TokenNotFoundException,
)
from officeauth.domain.value_objects import normalize_email
from officeauth.shared.utils.datetime import utc_now
from officeauth.shared.utils.generators import generate_token, is_well_formed_token


def _check_format(token: str) -> None:
    if not is_well_formed_token(token):
        raise InvalidTokenException()


def _matches(record: TokenRecord | None, kind: TokenKind | None) -> bool:
    return record is not None and (kind is None or record.kind == kind)


class TokenLifecycleManager:
    """Issues, validates, consumes and purges account tokens.

    validate never mutates state; consume is the only way a token becomes used.
    """

    def __init__(
        self,
        token_store: ITokenStore,
        credential_store: ICredentialStore,
        *,
        verification_ttl: timedelta = timedelta(hours=24),
        password_reset_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.token_store = token_store
        self.credential_store = credential_store
        self.verification_ttl = verification_ttl
        self.password_reset_ttl = password_reset_ttl
        self._clock = clock

    async def issue_verification_token(self, user_id: str, email: str) -> IssuedToken:
        """Issue an email verification token for user_id. Raises ResourceNotFoundException."""
        await self._require_user(user_id)
        return await self._issue(
            TokenKind.EMAIL_VERIFICATION,
            user_id,
            self.verification_ttl,
            email=normalize_email(email),
        )

    async def issue_password_reset_token(self, user_id: str) -> IssuedToken:
        """Issue a password reset token for user_id. Raises ResourceNotFoundException."""
        await self._require_user(user_id)
        return await self._issue(TokenKind.PASSWORD_RESET, user_id, self.password_reset_ttl)

    async def validate(self, token: str, kind: TokenKind | None = None) -> TokenValidation:
        """Report the token's status without changing it.

        A token of another kind than requested is reported as not_found.

        Raises:
            InvalidTokenException: token is not a well-formed token string.
        """
        _check_format(token)
        record = await self.token_store.get(token)
        if not _matches(record, kind):
            return TokenValidation(status=TokenStatus.NOT_FOUND)
        return TokenValidation(status=record.status_at(self._clock()), record=record)

    async def consume(self, token: str, kind: TokenKind | None = None) -> TokenConsumption:
        """Mark the token used if it is valid now. Exactly one concurrent caller wins.

        Raises:
            InvalidTokenException: token is not a well-formed token string.
        """
        _check_format(token)
        now = self._clock()
        won = await self.token_store.mark_used(token, now, kind)
        if won is not None:
            return TokenConsumption(consumed=True, status=TokenStatus.VALID, record=won)
        record = await self.token_store.get(token)
        if not _matches(record, kind):
            return TokenConsumption(consumed=False, status=TokenStatus.NOT_FOUND)
        status = record.status_at(now)
        if status == TokenStatus.VALID:
            # Lost the race to a consumer whose write landed after our read.
            status = TokenStatus.ALREADY_USED
        return TokenConsumption(consumed=False, status=status, record=record)

    async def increment_resend_count(self, token: str) -> int:
        """Bump the resend counter and return the new count. Raises TokenNotFoundException."""
        _check_format(token)
        count = await self.token_store.increment_resend_count(token)
        if count is None:
            raise TokenNotFoundException()
        return count

    async def active_verification_token(self, user_id: str) -> TokenRecord | None:
        """Return the newest unused, unexpired verification token for user_id."""
        return await self.token_store.latest_active(
            user_id, TokenKind.EMAIL_VERIFICATION, self._clock()
        )

    async def purge_expired(self) -> int:
        """Delete used and expired tokens; return how many were removed."""
        return await self.token_store.delete_expired_or_used(self._clock())

    async def revoke_user_tokens(self, user_id: str) -> int:
        """Delete every token belonging to user_id."""
        return await self.token_store.delete_for_user(user_id)

    async def _require_user(self, user_id: str) -> None:
        if await self.credential_store.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)

    async def _issue(
        self,
        kind: TokenKind,
        user_id: str,
        ttl: timedelta,
        email: str | None = None,
    ) -> IssuedToken:
        now = self._clock()
        record = TokenRecord(
            token=generate_token(),
            kind=kind,
            user_id=user_id,
            email=email,
            expires_at=now + ttl,
            created_at=now,
        )
        await self.token_store.insert(record)
        return IssuedToken(
            token=record.token,
            kind=kind,
            user_id=user_id,
            expires_at=record.expires_at,
            email=email,
        )
