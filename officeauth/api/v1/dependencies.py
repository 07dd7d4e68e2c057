"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the storage backend and the core services.
All services are built from infrastructure implementations here; routes
depend only on these dependencies, not on infra directly.

When storage_backend is 'memory', every request shares the MemoryBackend
attached to app.state. When it is 'postgres', each request gets repositories
over one session: a read session, or one transaction for writes so that an
override change and its audit entries commit together.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from officeauth.application.interfaces.repositories import (
    IBrandingStore,
    ICredentialStore,
    IOfficeRepository,
    IOverrideStore,
    IRoleAuditTrail,
    ITokenStore,
)
from officeauth.application.services import (
    AccountService,
    BrandingResolver,
    OfficeRegistry,
    PermissionEngine,
    TokenLifecycleManager,
)
from officeauth.core.config import get_settings
from officeauth.domain.enums import Role
from officeauth.domain.exceptions import AuthenticationException, AuthorizationException
from officeauth.infrastructure.memory import MemoryBackend
from officeauth.infrastructure.persistence.database import (
    read_session,
    transactional_session,
)
from officeauth.infrastructure.persistence.repositories import (
    BrandingRepository,
    OfficeRepository,
    OverrideRepository,
    RoleAuditRepository,
    TokenRepository,
    UserRepository,
)
from officeauth.infrastructure.security.jwt import verify_token
from officeauth.infrastructure.security.password import BcryptPasswordHasher

# Slug that lets a caller act on offices other than their own.
CROSS_OFFICE_PERMISSION = "admin.system"

_http_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Stores:
    """One implementation of every port, all bound to the same backend/session."""

    overrides: IOverrideStore
    tokens: ITokenStore
    branding: IBrandingStore
    offices: IOfficeRepository
    credentials: ICredentialStore
    audit: IRoleAuditTrail


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as seen by the core: who, which role, which office."""

    user_id: str
    role: Role
    office_id: str | None


def _memory_stores(memory: MemoryBackend) -> Stores:
    return Stores(
        overrides=memory.overrides,
        tokens=memory.tokens,
        branding=memory.branding,
        offices=memory.offices,
        credentials=memory.credentials,
        audit=memory.audit,
    )


def _sql_stores(session: AsyncSession) -> Stores:
    return Stores(
        overrides=OverrideRepository(session),
        tokens=TokenRepository(session),
        branding=BrandingRepository(session),
        offices=OfficeRepository(session),
        credentials=UserRepository(session),
        audit=RoleAuditRepository(session),
    )


def _memory_backend(app: FastAPI) -> MemoryBackend | None:
    return getattr(app.state, "memory", None)


async def get_stores(request: Request) -> AsyncIterator[Stores]:
    """Stores for read operations."""
    memory = _memory_backend(request.app)
    if memory is not None:
        yield _memory_stores(memory)
        return
    async with read_session() as session:
        yield _sql_stores(session)


async def get_stores_for_write(request: Request) -> AsyncIterator[Stores]:
    """Stores for writes; with postgres, one transaction for the whole request."""
    memory = _memory_backend(request.app)
    if memory is not None:
        yield _memory_stores(memory)
        return
    async with transactional_session() as session:
        yield _sql_stores(session)


# ---- Service builders (plain functions so the purge task can reuse them) ----


def build_token_manager(stores: Stores) -> TokenLifecycleManager:
    settings = get_settings()
    return TokenLifecycleManager(
        stores.tokens,
        stores.credentials,
        verification_ttl=timedelta(hours=settings.verification_token_ttl_hours),
        password_reset_ttl=timedelta(minutes=settings.password_reset_token_ttl_minutes),
    )


def build_account_service(stores: Stores) -> AccountService:
    settings = get_settings()
    return AccountService(
        stores.credentials,
        build_token_manager(stores),
        stores.audit,
        BcryptPasswordHasher(),
        resend_limit=settings.verification_resend_limit,
    )


async def purge_expired_tokens(app: FastAPI) -> int:
    """Run one token purge against the app's storage backend (used by the lifespan task)."""
    memory = _memory_backend(app)
    if memory is not None:
        return await build_token_manager(_memory_stores(memory)).purge_expired()
    async with transactional_session() as session:
        return await build_token_manager(_sql_stores(session)).purge_expired()


# ---- Depends() providers ----


async def get_permission_engine(
    stores: Annotated[Stores, Depends(get_stores)],
) -> PermissionEngine:
    return PermissionEngine(stores.overrides, stores.audit)


async def get_permission_engine_for_write(
    stores: Annotated[Stores, Depends(get_stores_for_write)],
) -> PermissionEngine:
    return PermissionEngine(stores.overrides, stores.audit)


async def get_token_manager(
    stores: Annotated[Stores, Depends(get_stores)],
) -> TokenLifecycleManager:
    return build_token_manager(stores)


async def get_account_service(
    stores: Annotated[Stores, Depends(get_stores)],
) -> AccountService:
    """Account service for read-only flows (login, profile)."""
    return build_account_service(stores)


async def get_account_service_for_write(
    stores: Annotated[Stores, Depends(get_stores_for_write)],
) -> AccountService:
    return build_account_service(stores)


async def get_office_registry(
    stores: Annotated[Stores, Depends(get_stores)],
) -> OfficeRegistry:
    return OfficeRegistry(stores.offices, default_tax_year=get_settings().default_tax_year)


async def get_office_registry_for_write(
    stores: Annotated[Stores, Depends(get_stores_for_write)],
) -> OfficeRegistry:
    return OfficeRegistry(stores.offices, default_tax_year=get_settings().default_tax_year)


async def get_branding_resolver(
    stores: Annotated[Stores, Depends(get_stores)],
) -> BrandingResolver:
    return BrandingResolver(stores.branding, stores.offices)


async def get_branding_resolver_for_write(
    stores: Annotated[Stores, Depends(get_stores_for_write)],
) -> BrandingResolver:
    return BrandingResolver(stores.branding, stores.offices)


async def get_role_audit_trail(
    stores: Annotated[Stores, Depends(get_stores)],
) -> IRoleAuditTrail:
    return stores.audit


# ---- Authentication and authorization ----


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    stores: Annotated[Stores, Depends(get_stores)],
) -> Principal:
    """Return the caller from the bearer session token; raise 401 if missing or invalid.

    Role and office come from the stored account, so a role change or
    deactivation takes effect on the next request.
    """
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired session token") from None
    account = await stores.credentials.get_by_id(payload["sub"])
    if account is None or not account.is_active:
        raise AuthenticationException("Account is not active")
    return Principal(user_id=account.id, role=account.role, office_id=account.office_id)


def require_permission(slug: str):
    """Dependency factory: require a session and that the caller's role holds slug."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    ) -> Principal:
        await engine.require_permission(principal.role, slug)
        return principal

    return _require


async def ensure_office_access(
    principal: Principal, office_id: str, engine: PermissionEngine
) -> None:
    """Allow callers acting on their own office, or holding the cross-office permission."""
    if principal.office_id == office_id:
        return
    if not await engine.has_permission(principal.role, CROSS_OFFICE_PERMISSION):
        raise AuthorizationException(permission=CROSS_OFFICE_PERMISSION)
