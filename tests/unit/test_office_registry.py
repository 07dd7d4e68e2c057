"""OfficeRegistry unit tests: creation, slug rules, partial updates."""

import pytest

from officeauth.application.services.office_registry import OfficeRegistry, clean_office_fields
from officeauth.domain.exceptions import (
    OfficeNotFoundException,
    OfficeSlugTakenException,
    ValidationException,
)


async def test_create_office_defaults(registry: OfficeRegistry, clock) -> None:
    office = await registry.create_office("Acme Tax", slug="  Acme-Tax ")
    assert office.slug == "acme-tax"
    assert office.default_tax_year == 2024
    assert office.is_active is True
    assert office.created_at == clock.now


async def test_create_office_without_slug(registry: OfficeRegistry) -> None:
    first = await registry.create_office("No Slug One")
    second = await registry.create_office("No Slug Two")
    assert first.slug is None and second.slug is None


async def test_duplicate_slug_rejected(registry: OfficeRegistry) -> None:
    await registry.create_office("Acme", slug="acme")
    with pytest.raises(OfficeSlugTakenException):
        await registry.create_office("Acme Again", slug="ACME")


@pytest.mark.parametrize("slug", ["a", "bad slug", "-lead", "trail-", "under_score"])
async def test_invalid_slug_rejected(registry: OfficeRegistry, slug: str) -> None:
    with pytest.raises(ValidationException):
        await registry.create_office("Bad", slug=slug)


async def test_get_office_by_slug_is_case_insensitive(registry: OfficeRegistry) -> None:
    office = await registry.create_office("Beta", slug="beta")
    assert (await registry.get_office_by_slug(" BETA ")).id == office.id
    assert await registry.get_office_by_slug("gamma") is None
    assert await registry.get_office_by_slug("not a slug!") is None


async def test_get_office_missing(registry: OfficeRegistry) -> None:
    with pytest.raises(OfficeNotFoundException):
        await registry.get_office("missing")


async def test_update_office_partial(registry: OfficeRegistry, clock) -> None:
    office = await registry.create_office("Gamma", slug="gamma", city="Austin")
    clock.advance(minutes=1)
    updated = await registry.update_office(office.id, {"phone": "555-0100", "city": ""})
    assert updated.phone == "555-0100"
    assert updated.city is None
    assert updated.name == "Gamma"
    assert updated.updated_at == clock.now


async def test_update_to_taken_slug(registry: OfficeRegistry) -> None:
    await registry.create_office("One", slug="one")
    two = await registry.create_office("Two", slug="two")
    with pytest.raises(OfficeSlugTakenException):
        await registry.update_office(two.id, {"slug": "one"})
    # Keeping its own slug is fine.
    assert (await registry.update_office(two.id, {"slug": "two"})).slug == "two"


async def test_update_missing_office(registry: OfficeRegistry) -> None:
    with pytest.raises(OfficeNotFoundException):
        await registry.update_office("missing", {"name": "X"})


async def test_deactivate_and_list(registry: OfficeRegistry) -> None:
    active = await registry.create_office("Active")
    closed = await registry.create_office("Closed")
    await registry.deactivate_office(closed.id)
    assert [o.id for o in await registry.list_offices(active_only=True)] == [active.id]
    assert len(await registry.list_offices()) == 2


@pytest.mark.parametrize(
    "changes",
    [
        {"name": "  "},
        {"default_tax_year": 1800},
        {"default_tax_year": True},
        {"is_active": "yes"},
        {"email": "nope"},
        {"owner": "someone"},
    ],
)
def test_clean_office_fields_rejects(changes: dict) -> None:
    with pytest.raises(ValidationException):
        clean_office_fields(changes)


def test_clean_office_fields_normalizes_email() -> None:
    assert clean_office_fields({"email": " Front@Acme.COM "}) == {"email": "front@acme.com"}
