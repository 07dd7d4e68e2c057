"""TokenLifecycleManager unit tests: issue, validate, single-use consume, expiry, purge."""

import asyncio
import threading
from datetime import UTC, datetime

import pytest

from officeauth.application.dtos.account import AccountRecord
from officeauth.application.services.token_lifecycle import TokenLifecycleManager
from officeauth.domain.enums import Role, TokenKind, TokenStatus
from officeauth.domain.exceptions import (
    InvalidTokenException,
    ResourceNotFoundException,
    TokenNotFoundException,
)
from officeauth.shared.utils.generators import generate_token


@pytest.fixture
async def user(memory) -> AccountRecord:
    record = AccountRecord(
        id="user-1",
        email="pat@example.com",
        role=Role.CLIENT,
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )
    return await memory.credentials.create(record)


async def test_issue_verification_token(token_manager: TokenLifecycleManager, user, clock) -> None:
    issued = await token_manager.issue_verification_token(user.id, " Pat@Example.com ")
    assert len(issued.token) == 64
    assert issued.kind == TokenKind.EMAIL_VERIFICATION
    assert issued.email == "pat@example.com"
    assert issued.expires_at == clock.advance(hours=24)


async def test_issued_tokens_are_unique(token_manager: TokenLifecycleManager, user) -> None:
    tokens = {
        (await token_manager.issue_password_reset_token(user.id)).token for _ in range(20)
    }
    assert len(tokens) == 20


async def test_issue_for_unknown_user(token_manager: TokenLifecycleManager) -> None:
    with pytest.raises(ResourceNotFoundException):
        await token_manager.issue_password_reset_token("missing-user")


async def test_validate_does_not_consume(token_manager: TokenLifecycleManager, user) -> None:
    issued = await token_manager.issue_verification_token(user.id, user.email)
    for _ in range(3):
        result = await token_manager.validate(issued.token, TokenKind.EMAIL_VERIFICATION)
        assert result.is_valid
    consumed = await token_manager.consume(issued.token, TokenKind.EMAIL_VERIFICATION)
    assert consumed.consumed is True


async def test_consume_is_single_use(token_manager: TokenLifecycleManager, user) -> None:
    issued = await token_manager.issue_password_reset_token(user.id)
    first = await token_manager.consume(issued.token, TokenKind.PASSWORD_RESET)
    second = await token_manager.consume(issued.token, TokenKind.PASSWORD_RESET)

    assert first.consumed is True
    assert first.record.user_id == user.id
    assert second.consumed is False
    assert second.status == TokenStatus.ALREADY_USED
    validation = await token_manager.validate(issued.token)
    assert validation.status == TokenStatus.ALREADY_USED


async def test_token_expires_at_boundary(token_manager: TokenLifecycleManager, user, clock) -> None:
    issued = await token_manager.issue_password_reset_token(user.id)
    clock.advance(minutes=59, seconds=59)
    assert (await token_manager.validate(issued.token)).status == TokenStatus.VALID
    clock.advance(seconds=1)
    assert (await token_manager.validate(issued.token)).status == TokenStatus.EXPIRED
    result = await token_manager.consume(issued.token)
    assert result.consumed is False
    assert result.status == TokenStatus.EXPIRED


async def test_used_takes_precedence_over_expired(
    token_manager: TokenLifecycleManager, user, clock
) -> None:
    issued = await token_manager.issue_password_reset_token(user.id)
    await token_manager.consume(issued.token)
    clock.advance(hours=2)
    assert (await token_manager.validate(issued.token)).status == TokenStatus.ALREADY_USED


async def test_unknown_token_is_not_found(token_manager: TokenLifecycleManager) -> None:
    token = generate_token()
    assert (await token_manager.validate(token)).status == TokenStatus.NOT_FOUND
    result = await token_manager.consume(token)
    assert result.consumed is False
    assert result.status == TokenStatus.NOT_FOUND


async def test_kind_mismatch_is_not_found_and_not_consumed(
    token_manager: TokenLifecycleManager, user
) -> None:
    issued = await token_manager.issue_password_reset_token(user.id)
    wrong = await token_manager.consume(issued.token, TokenKind.EMAIL_VERIFICATION)
    assert wrong.status == TokenStatus.NOT_FOUND
    right = await token_manager.consume(issued.token, TokenKind.PASSWORD_RESET)
    assert right.consumed is True


@pytest.mark.parametrize("token", ["", "short", "Z" * 64, generate_token().upper()])
async def test_malformed_token_rejected(token_manager: TokenLifecycleManager, token: str) -> None:
    with pytest.raises(InvalidTokenException):
        await token_manager.validate(token)
    with pytest.raises(InvalidTokenException):
        await token_manager.consume(token)


async def test_concurrent_consumers_on_one_loop(token_manager: TokenLifecycleManager, user) -> None:
    issued = await token_manager.issue_verification_token(user.id, user.email)
    results = await asyncio.gather(
        *(token_manager.consume(issued.token) for _ in range(25))
    )
    assert sum(r.consumed for r in results) == 1
    assert all(r.status == TokenStatus.ALREADY_USED for r in results if not r.consumed)


async def test_concurrent_consumers_across_threads(memory, user) -> None:
    manager = TokenLifecycleManager(memory.tokens, memory.credentials)
    issued = await manager.issue_verification_token(user.id, user.email)
    workers = 8
    barrier = threading.Barrier(workers)
    outcomes: list[bool] = []
    outcomes_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        result = asyncio.run(manager.consume(issued.token))
        with outcomes_lock:
            outcomes.append(result.consumed)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert outcomes.count(True) == 1
    assert len(outcomes) == workers


async def test_increment_resend_count(token_manager: TokenLifecycleManager, user) -> None:
    issued = await token_manager.issue_verification_token(user.id, user.email)
    assert await token_manager.increment_resend_count(issued.token) == 1
    assert await token_manager.increment_resend_count(issued.token) == 2
    with pytest.raises(TokenNotFoundException):
        await token_manager.increment_resend_count(generate_token())


async def test_active_verification_token_is_newest_unexpired(
    token_manager: TokenLifecycleManager, user, clock
) -> None:
    first = await token_manager.issue_verification_token(user.id, user.email)
    clock.advance(minutes=5)
    second = await token_manager.issue_verification_token(user.id, user.email)
    active = await token_manager.active_verification_token(user.id)
    assert active.token == second.token

    await token_manager.consume(second.token)
    active = await token_manager.active_verification_token(user.id)
    assert active.token == first.token

    clock.advance(hours=24)
    assert await token_manager.active_verification_token(user.id) is None


async def test_purge_removes_used_and_expired_only(
    token_manager: TokenLifecycleManager, user, clock, memory
) -> None:
    used = await token_manager.issue_password_reset_token(user.id)
    await token_manager.consume(used.token)
    expiring = await token_manager.issue_password_reset_token(user.id)
    live = await token_manager.issue_verification_token(user.id, user.email)
    clock.advance(hours=2)

    assert await token_manager.purge_expired() == 2
    assert await memory.tokens.get(used.token) is None
    assert await memory.tokens.get(expiring.token) is None
    assert (await token_manager.validate(live.token)).is_valid


async def test_revoke_user_tokens(token_manager: TokenLifecycleManager, user) -> None:
    issued = await token_manager.issue_password_reset_token(user.id)
    await token_manager.issue_verification_token(user.id, user.email)
    assert await token_manager.revoke_user_tokens(user.id) == 2
    assert (await token_manager.validate(issued.token)).status == TokenStatus.NOT_FOUND
