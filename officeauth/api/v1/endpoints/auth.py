"""Auth API: register, login, email verification, password reset, current account.

Token links are delivered by the email layer; these routes never return a
raw account token.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from officeauth.api.v1.dependencies import (
    Principal,
    get_account_service,
    get_account_service_for_write,
    get_current_principal,
    get_office_registry_for_write,
    get_token_manager,
)
from officeauth.application.services import (
    AccountService,
    OfficeRegistry,
    TokenLifecycleManager,
)
from officeauth.core.limiter import (
    limit_login,
    limit_register,
    limit_token_redeem,
    limit_token_request,
)
from officeauth.domain.enums import Role, TokenKind
from officeauth.domain.exceptions import AuthenticationException, OfficeNotFoundException
from officeauth.infrastructure.security.jwt import create_access_token
from officeauth.schemas.auth import (
    AccountResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenRequest,
    TokenSentResponse,
    TokenStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_RESET_SENT_MESSAGE = "If an account exists for that email, a reset link has been sent"


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
    offices: Annotated[OfficeRegistry, Depends(get_office_registry_for_write)],
):
    """Create a client account (public). The verification link is e-mailed."""
    office_id = None
    if body.office_slug:
        office = await offices.get_office_by_slug(body.office_slug)
        if office is None or not office.is_active:
            raise OfficeNotFoundException(body.office_slug)
        office_id = office.id
    account, issued = await accounts.register(
        email=body.email,
        password=body.password,
        role=Role.CLIENT,
        office_id=office_id,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    logger.info("Registered account %s (office=%s)", account.id, office_id)
    return RegisterResponse(
        account=AccountResponse.model_validate(account),
        verification_expires_at=issued.expires_at,
    )


@router.post("/login", response_model=LoginResponse)
@limit_login
async def login(
    request: Request,
    body: LoginRequest,
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Authenticate with email and password; return a session JWT."""
    account = await accounts.authenticate(body.email, body.password)
    if account is None:
        raise AuthenticationException("Invalid credentials")
    token = create_access_token(
        data={"sub": account.id, "role": account.role.value, "office_id": account.office_id}
    )
    return LoginResponse(access_token=token, account=AccountResponse.model_validate(account))


@router.post("/verify-email", response_model=AccountResponse)
@limit_token_redeem
async def verify_email(
    request: Request,
    body: TokenRequest,
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Redeem an email verification token (single use)."""
    account = await accounts.verify_email(body.token)
    return AccountResponse.model_validate(account)


@router.post("/resend-verification", response_model=TokenSentResponse)
@limit_token_request
async def resend_verification(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Send the verification link again (capped per token)."""
    issued = await accounts.resend_verification(principal.user_id)
    return TokenSentResponse(
        message="Verification email sent",
        expires_at=issued.expires_at,
        resend_count=issued.resend_count,
    )


@router.post("/forgot-password", response_model=MessageResponse, status_code=202)
@limit_token_request
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Start a password reset. The response is the same whether or not the account exists."""
    await accounts.request_password_reset(body.email)
    return MessageResponse(message=_RESET_SENT_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
@limit_token_redeem
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Redeem a password reset token and set the new password."""
    account = await accounts.reset_password(body.token, body.new_password)
    logger.info("Password reset for account %s", account.id)
    return MessageResponse(message="Password has been reset")


@router.get("/tokens/{token}", response_model=TokenStatusResponse)
@limit_token_redeem
async def check_token(
    request: Request,
    token: str,
    tokens: Annotated[TokenLifecycleManager, Depends(get_token_manager)],
    kind: TokenKind | None = None,
):
    """Report whether a token link is still usable, without redeeming it."""
    result = await tokens.validate(token, kind)
    record = result.record
    return TokenStatusResponse(
        status=result.status,
        kind=record.kind if record else None,
        expires_at=record.expires_at if record else None,
    )


@router.get("/me", response_model=AccountResponse)
async def get_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Return the authenticated account."""
    return AccountResponse.model_validate(await accounts.get_account(principal.user_id))


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
) -> None:
    """Delete the caller's account (scrubbed, tokens revoked)."""
    await accounts.delete_account(principal.user_id)
    logger.info("Account %s deleted by owner", principal.user_id)
