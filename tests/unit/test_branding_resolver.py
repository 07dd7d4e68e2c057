"""BrandingResolver unit tests: per-field fallback, partial upserts, slug lookup."""

import pytest

from officeauth.application.services import BrandingResolver, OfficeRegistry
from officeauth.domain.branding import BRANDING_FIELDS, PLATFORM_BRANDING
from officeauth.domain.enums import Theme
from officeauth.domain.exceptions import OfficeNotFoundException, ValidationException


@pytest.fixture
async def office(registry: OfficeRegistry):
    return await registry.create_office("Acme Tax", slug="acme")


def _assert_platform(view) -> None:
    for name in BRANDING_FIELDS:
        assert getattr(view, name) == getattr(PLATFORM_BRANDING, name)


async def test_no_office_gets_platform_defaults(branding: BrandingResolver) -> None:
    view = await branding.resolve(None)
    assert view.office_id is None
    assert view.is_custom is False
    assert view.company_name == "STS TaxRepair"
    assert view.logo_url is None
    assert view.reply_to_email == "Info.ststax@gmail.com"
    _assert_platform(view)


async def test_office_without_record_gets_defaults(branding: BrandingResolver, office) -> None:
    view = await branding.resolve(office.id)
    assert view.office_id == office.id
    assert view.is_custom is False
    _assert_platform(view)


async def test_unknown_office_never_fails(branding: BrandingResolver) -> None:
    _assert_platform(await branding.resolve("no-such-office"))


async def test_partial_branding_falls_back_per_field(branding: BrandingResolver, office) -> None:
    view = await branding.upsert(office.id, {"company_name": "Acme Tax Pros"}, actor_id="u1")
    assert view.is_custom is True
    assert view.company_name == "Acme Tax Pros"
    assert view.logo_url is None
    assert view.primary_color == PLATFORM_BRANDING.primary_color


async def test_upsert_merges_with_existing(branding: BrandingResolver, office, memory) -> None:
    await branding.upsert(office.id, {"company_name": "Acme", "primary_color": "#112233"})
    view = await branding.upsert(office.id, {"default_theme": "dark"}, actor_id="u2")
    assert view.company_name == "Acme"
    assert view.primary_color == "#112233"
    assert view.default_theme == Theme.DARK
    record = await memory.branding.get(office.id)
    assert record.updated_by_user_id == "u2"


async def test_null_clears_field_to_default(branding: BrandingResolver, office) -> None:
    await branding.upsert(office.id, {"company_name": "Acme", "accent_color": "#abc"})
    view = await branding.upsert(office.id, {"accent_color": None})
    assert view.accent_color == PLATFORM_BRANDING.accent_color
    assert view.company_name == "Acme"


@pytest.mark.parametrize(
    "changes",
    [
        {"primary_color": "green"},
        {"secondary_color": "#12345"},
        {"default_theme": "sepia"},
        {"reply_to_email": "not-email"},
        {"favicon_url": "https://x"},
    ],
)
async def test_invalid_branding_rejected(branding: BrandingResolver, office, changes) -> None:
    with pytest.raises(ValidationException):
        await branding.upsert(office.id, changes)
    assert (await branding.resolve(office.id)).is_custom is False


async def test_upsert_unknown_office(branding: BrandingResolver) -> None:
    with pytest.raises(OfficeNotFoundException):
        await branding.upsert("missing", {"company_name": "Ghost"})


async def test_resolve_by_slug(branding: BrandingResolver, office) -> None:
    await branding.upsert(office.id, {"company_name": "Acme Tax"})
    assert (await branding.resolve_by_slug("ACME")).company_name == "Acme Tax"
    unknown = await branding.resolve_by_slug("nobody")
    assert unknown.office_id is None
    _assert_platform(unknown)
    _assert_platform(await branding.resolve_by_slug("!!"))


async def test_reset(branding: BrandingResolver, office) -> None:
    await branding.upsert(office.id, {"company_name": "Acme"})
    assert await branding.reset(office.id) is True
    assert await branding.reset(office.id) is False
    _assert_platform(await branding.resolve(office.id))
