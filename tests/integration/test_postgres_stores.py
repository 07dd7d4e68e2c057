"""Postgres store integration tests. Require Postgres; each test's session is rolled back."""

import asyncio
from datetime import timedelta

import pytest

from officeauth.application.services import (
    AccountService,
    BrandingResolver,
    OfficeRegistry,
    PermissionEngine,
    TokenLifecycleManager,
)
from officeauth.domain.enums import Role, RoleAuditAction, TokenKind, TokenStatus
from officeauth.domain.exceptions import AccountAlreadyExistsException, OfficeSlugTakenException
from officeauth.infrastructure.persistence.repositories import (
    BrandingRepository,
    OfficeRepository,
    OverrideRepository,
    RoleAuditRepository,
    TokenRepository,
    UserRepository,
)
from officeauth.infrastructure.security.password import BcryptPasswordHasher
from officeauth.shared.utils.generators import generate_cuid


def _accounts(db_session) -> AccountService:
    users = UserRepository(db_session)
    tokens = TokenLifecycleManager(TokenRepository(db_session), users)
    return AccountService(users, tokens, RoleAuditRepository(db_session), BcryptPasswordHasher(4))


def _email() -> str:
    return f"it-{generate_cuid()}@example.com"


@pytest.mark.requires_db
async def test_register_and_lookup_account(db_session) -> None:
    accounts = _accounts(db_session)
    email = _email()
    account, issued = await accounts.register(email, "password123", first_name="Ivy")
    users = UserRepository(db_session)
    stored = await users.get_by_email(email)
    assert stored is not None
    assert stored.id == account.id
    assert stored.role == Role.CLIENT
    assert stored.password_hash
    assert (await TokenRepository(db_session).get(issued.token)).kind == TokenKind.EMAIL_VERIFICATION

    with pytest.raises(AccountAlreadyExistsException):
        await accounts.register(email.upper(), "password123")


@pytest.mark.requires_db
async def test_token_consumed_once(db_session) -> None:
    accounts = _accounts(db_session)
    account, issued = await accounts.register(_email(), "password123")
    manager = TokenLifecycleManager(TokenRepository(db_session), UserRepository(db_session))

    first = await manager.consume(issued.token, TokenKind.EMAIL_VERIFICATION)
    second = await manager.consume(issued.token, TokenKind.EMAIL_VERIFICATION)
    assert first.consumed is True
    assert second.consumed is False
    assert second.status == TokenStatus.ALREADY_USED
    assert (await manager.validate(issued.token)).status == TokenStatus.ALREADY_USED


@pytest.mark.requires_db
async def test_token_expiry_and_resend_count(db_session) -> None:
    accounts = _accounts(db_session)
    account, _ = await accounts.register(_email(), "password123")
    manager = TokenLifecycleManager(
        TokenRepository(db_session),
        UserRepository(db_session),
        password_reset_ttl=timedelta(seconds=-1),
    )
    issued = await manager.issue_password_reset_token(account.id)
    assert (await manager.validate(issued.token)).status == TokenStatus.EXPIRED
    assert (await manager.consume(issued.token)).status == TokenStatus.EXPIRED
    assert await manager.increment_resend_count(issued.token) == 1
    assert await manager.purge_expired() >= 1


@pytest.mark.requires_db
async def test_overrides_and_audit_entries(db_session) -> None:
    engine = PermissionEngine(OverrideRepository(db_session), RoleAuditRepository(db_session))
    actor = f"actor-{generate_cuid()}"

    entries = await engine.bulk_set_overrides(
        Role.AGENT, {"clients.delete": True, "leads.view": False}, actor_id=actor
    )
    assert len(entries) == 2
    assert await engine.has_permission(Role.AGENT, "clients.delete") is True
    assert await engine.has_permission(Role.AGENT, "leads.view") is False

    assert await engine.set_override(Role.AGENT, "clients.delete", True, actor) is False
    assert await engine.clear_override(Role.AGENT, "leads.view", actor) is True
    assert await engine.role_overrides(Role.AGENT) == {"clients.delete": True}

    matrix = await engine.full_matrix()
    assert matrix.is_granted(Role.AGENT, "clients.delete") is True

    logged = await RoleAuditRepository(db_session).list_entries(role=Role.AGENT, limit=3)
    assert logged[0].action == RoleAuditAction.OVERRIDE_CLEARED
    assert logged[0].actor_id == actor


@pytest.mark.requires_db
async def test_office_slug_unique_and_branding_upsert(db_session) -> None:
    offices = OfficeRepository(db_session)
    registry = OfficeRegistry(offices)
    slug = f"it-{generate_cuid()[:12]}"
    office = await registry.create_office("Integration Office", slug=slug)
    assert (await registry.get_office_by_slug(slug.upper())).id == office.id

    resolver = BrandingResolver(BrandingRepository(db_session), offices)
    await resolver.upsert(office.id, {"company_name": "IT Co", "primary_color": "#101010"})
    view = await resolver.upsert(office.id, {"primary_color": None, "default_theme": "dark"})
    assert view.company_name == "IT Co"
    assert view.default_theme.value == "dark"
    assert await resolver.reset(office.id) is True
    assert (await resolver.resolve(office.id)).is_custom is False

    with pytest.raises(OfficeSlugTakenException):
        await registry.create_office("Duplicate", slug=slug)


@pytest.mark.requires_db
async def test_concurrent_consume_on_separate_sessions() -> None:
    """Two sessions race to consume one committed token; exactly one wins."""
    from officeauth.infrastructure.persistence import database

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured")

    async with database.transactional_session() as session:
        account, issued = await _accounts(session).register(_email(), "password123")

    async def consume() -> bool:
        async with database.transactional_session() as session:
            manager = TokenLifecycleManager(TokenRepository(session), UserRepository(session))
            return (await manager.consume(issued.token)).consumed

    try:
        results = await asyncio.gather(*(consume() for _ in range(5)))
        assert results.count(True) == 1
    finally:
        async with database.transactional_session() as session:
            await AccountService(
                UserRepository(session),
                TokenLifecycleManager(TokenRepository(session), UserRepository(session)),
                RoleAuditRepository(session),
                BcryptPasswordHasher(4),
            ).delete_account(account.id)
        await database.dispose_engine()
