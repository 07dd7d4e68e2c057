"""Account service: registration, login, email verification, password reset, role changes, deletion.

Composes the credential store with the token lifecycle manager. Password
hashing is CPU-bound and runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime

from officeauth.application.dtos.account import AccountRecord, AccountResult
from officeauth.application.dtos.audit import RoleAuditEntry
from officeauth.application.dtos.token import IssuedToken, TokenConsumption
from officeauth.application.interfaces.repositories import ICredentialStore, IRoleAuditTrail
from officeauth.application.interfaces.services import IPasswordHasher
from officeauth.application.services.token_lifecycle import TokenLifecycleManager
from officeauth.domain.enums import AccountStatus, Role, RoleAuditAction, TokenKind, TokenStatus
from officeauth.domain.exceptions import (
    AccountAlreadyExistsException,
    ResendLimitExceededException,
    ResourceNotFoundException,
    TokenAlreadyUsedException,
    TokenExpiredException,
    TokenNotFoundException,
    ValidationException,
)
from officeauth.domain.value_objects import normalize_email
from officeauth.shared.utils.datetime import utc_now
from officeauth.shared.utils.generators import generate_cuid

MIN_PASSWORD_LENGTH = 8


def _check_password(password: str) -> None:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )


def _raise_for_failed(result: TokenConsumption) -> None:
    """Turn a failed consumption into the matching exception."""
    if result.status == TokenStatus.EXPIRED:
        raise TokenExpiredException()
    if result.status == TokenStatus.ALREADY_USED:
        raise TokenAlreadyUsedException()
    raise TokenNotFoundException()


def scrubbed_email(user_id: str) -> str:
    """Placeholder email for a deleted account; keeps the unique email column satisfied."""
    return f"deleted+{user_id}@deleted.invalid"


class AccountService:
    """Account flows over the credential store and account tokens."""

    def __init__(
        self,
        credential_store: ICredentialStore,
        token_manager: TokenLifecycleManager,
        audit_trail: IRoleAuditTrail,
        password_hasher: IPasswordHasher,
        *,
        resend_limit: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.credential_store = credential_store
        self.token_manager = token_manager
        self.audit_trail = audit_trail
        self.password_hasher = password_hasher
        self.resend_limit = resend_limit
        self._clock = clock

    async def register(
        self,
        email: str,
        password: str,
        role: Role | str = Role.CLIENT,
        office_id: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> tuple[AccountResult, IssuedToken]:
        """Create an account and its first email verification token.

        Raises:
            ValidationException: Malformed email or too-short password.
            InvalidRoleException: role is not a known role.
            AccountAlreadyExistsException: email already registered.
        """
        email = normalize_email(email)
        _check_password(password)
        role = Role.parse(role)
        if await self.credential_store.get_by_email(email) is not None:
            raise AccountAlreadyExistsException()
        password_hash = await asyncio.to_thread(self.password_hasher.hash_password, password)
        now = self._clock()
        record = AccountRecord(
            id=generate_cuid(),
            email=email,
            role=role,
            password_hash=password_hash,
            office_id=office_id,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        created = await self.credential_store.create(record)
        issued = await self.token_manager.issue_verification_token(created.id, created.email)
        return AccountResult.from_record(created), issued

    async def get_account(self, user_id: str) -> AccountResult:
        return AccountResult.from_record(await self._get(user_id))

    async def authenticate(self, email: str, password: str) -> AccountResult | None:
        """Return the account for valid credentials, else None. Inactive accounts never log in."""
        try:
            email = normalize_email(email)
        except ValidationException:
            return None
        record = await self.credential_store.get_by_email(email)
        if record is None or not record.is_active or not record.password_hash:
            return None
        ok = await asyncio.to_thread(
            self.password_hasher.verify_password, password, record.password_hash
        )
        return AccountResult.from_record(record) if ok else None

    async def verify_email(self, token: str) -> AccountResult:
        """Consume a verification token and mark the account's email verified."""
        result = await self.token_manager.consume(token, TokenKind.EMAIL_VERIFICATION)
        if not result.consumed:
            _raise_for_failed(result)
        now = self._clock()
        updated = await self.credential_store.update(
            result.record.user_id, {"email_verified_at": now}, now
        )
        if updated is None:
            raise ResourceNotFoundException("user", result.record.user_id)
        return AccountResult.from_record(updated)

    async def resend_verification(self, user_id: str) -> IssuedToken:
        """Return the verification token to e-mail again, issuing one if none is active.

        The active token is reused while its resend count is below the limit.

        Raises:
            ValidationException: Account inactive or already verified.
            ResendLimitExceededException: The active token was re-sent too often.
        """
        account = await self._get(user_id)
        if not account.is_active:
            raise ValidationException("Account is not active")
        if account.email_verified_at is not None:
            raise ValidationException("Email is already verified", field="email")
        active = await self.token_manager.active_verification_token(user_id)
        if active is None:
            return await self.token_manager.issue_verification_token(user_id, account.email)
        count = await self.token_manager.increment_resend_count(active.token)
        if count > self.resend_limit:
            raise ResendLimitExceededException(self.resend_limit)
        return IssuedToken(
            token=active.token,
            kind=active.kind,
            user_id=active.user_id,
            expires_at=active.expires_at,
            email=active.email,
            resend_count=count,
        )

    async def request_password_reset(self, email: str) -> IssuedToken | None:
        """Issue a reset token, or return None for unknown or inactive accounts."""
        try:
            email = normalize_email(email)
        except ValidationException:
            return None
        record = await self.credential_store.get_by_email(email)
        if record is None or not record.is_active:
            return None
        return await self.token_manager.issue_password_reset_token(record.id)

    async def reset_password(self, token: str, new_password: str) -> AccountResult:
        """Consume a reset token and store the new password hash."""
        _check_password(new_password)
        password_hash = await asyncio.to_thread(
            self.password_hasher.hash_password, new_password
        )
        result = await self.token_manager.consume(token, TokenKind.PASSWORD_RESET)
        if not result.consumed:
            _raise_for_failed(result)
        updated = await self.credential_store.update(
            result.record.user_id, {"password_hash": password_hash}, self._clock()
        )
        if updated is None:
            raise ResourceNotFoundException("user", result.record.user_id)
        return AccountResult.from_record(updated)

    async def change_role(
        self, user_id: str, new_role: Role | str, actor_id: str
    ) -> AccountResult:
        """Change the account's role and record it in the role audit trail."""
        new_role = Role.parse(new_role)
        account = await self._get(user_id)
        if account.role == new_role:
            return AccountResult.from_record(account)
        now = self._clock()
        updated = await self.credential_store.update(user_id, {"role": new_role}, now)
        if updated is None:
            raise ResourceNotFoundException("user", user_id)
        await self.audit_trail.append(
            RoleAuditEntry(
                id=generate_cuid(),
                action=RoleAuditAction.ROLE_CHANGED,
                actor_id=actor_id,
                role=new_role,
                old_value=account.role.value,
                new_value=new_role.value,
                target_user_id=user_id,
                created_at=now,
            )
        )
        return AccountResult.from_record(updated)

    async def deactivate(self, user_id: str) -> AccountResult:
        await self._get(user_id)
        updated = await self.credential_store.update(
            user_id, {"status": AccountStatus.DEACTIVATED}, self._clock()
        )
        if updated is None:
            raise ResourceNotFoundException("user", user_id)
        return AccountResult.from_record(updated)

    async def delete_account(self, user_id: str) -> AccountResult:
        """Scrub the account and revoke its tokens. The row itself is kept."""
        account = await self._get(user_id)
        await self.token_manager.revoke_user_tokens(user_id)
        if account.status == AccountStatus.SCRUBBED:
            return AccountResult.from_record(account)
        updated = await self.credential_store.update(
            user_id,
            {
                "status": AccountStatus.SCRUBBED,
                "email": scrubbed_email(user_id),
                "password_hash": None,
                "first_name": None,
                "last_name": None,
                "phone": None,
                "email_verified_at": None,
            },
            self._clock(),
        )
        if updated is None:
            raise ResourceNotFoundException("user", user_id)
        return AccountResult.from_record(updated)

    async def _get(self, user_id: str) -> AccountRecord:
        record = await self.credential_store.get_by_id(user_id)
        if record is None:
            raise ResourceNotFoundException("user", user_id)
        return record
