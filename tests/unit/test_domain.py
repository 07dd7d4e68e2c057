"""Domain tests: exceptions, enums, value objects, permission catalogue, branding rules."""

import pytest

from officeauth.domain.branding import PLATFORM_BRANDING, clean_branding_changes
from officeauth.domain.enums import Role, Theme, TokenStatus
from officeauth.domain.exceptions import (
    AuthorizationException,
    InvalidRoleException,
    OfficeAuthException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)
from officeauth.domain.permissions import (
    DEFAULT_PERMISSIONS,
    PermissionDefinition,
    PermissionPolicy,
    get_default_policy,
    is_privileged,
)
from officeauth.domain.value_objects import HexColor, OfficeSlug, normalize_email


def test_base_exception_defaults() -> None:
    exc = OfficeAuthException("Something failed")
    assert exc.error_code == "OfficeAuthException"
    assert exc.to_dict() == {"error": "OfficeAuthException", "message": "Something failed"}


def test_exception_to_dict_includes_details() -> None:
    exc = ResourceNotFoundException("user", "u-1")
    assert exc.to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "user not found: u-1",
        "details": {"resource_type": "user", "resource_id": "u-1"},
    }


def test_authorization_exception_names_permission() -> None:
    assert AuthorizationException().message == "Permission denied"
    exc = AuthorizationException(permission="admin.users")
    assert exc.message == "Permission denied: admin.users"
    assert exc.error_code == "PERMISSION_DENIED"


def test_sql_not_configured() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"


def test_role_parse() -> None:
    assert Role.parse("tax_office") is Role.TAX_OFFICE
    assert Role.parse(Role.AGENT) is Role.AGENT
    with pytest.raises(InvalidRoleException):
        Role.parse("ADMIN")
    with pytest.raises(InvalidRoleException):
        Role.parse("")


def test_enum_values() -> None:
    assert Role.values() == ["client", "agent", "tax_office", "admin", "super_admin"]
    assert TokenStatus.values() == ["valid", "expired", "already_used", "not_found"]
    assert Theme.values() == ["light", "dark"]


def test_is_privileged() -> None:
    assert is_privileged(Role.ADMIN)
    assert is_privileged(Role.SUPER_ADMIN)
    assert not any(is_privileged(r) for r in (Role.CLIENT, Role.AGENT, Role.TAX_OFFICE))


def test_office_slug_normalize() -> None:
    assert OfficeSlug.normalize("  Acme-Tax ").value == "acme-tax"
    with pytest.raises(ValidationException):
        OfficeSlug.normalize("")
    with pytest.raises(ValidationException):
        OfficeSlug("Acme")


@pytest.mark.parametrize("value", ["#fff", "#1a4d2e", "#ABCDEF"])
def test_hex_color_valid(value: str) -> None:
    assert HexColor(value).value == value


@pytest.mark.parametrize("value", ["fff", "#ffff", "#gggggg", ""])
def test_hex_color_invalid(value: str) -> None:
    with pytest.raises(ValidationException):
        HexColor(value)


def test_normalize_email() -> None:
    assert normalize_email("  Jo@Example.COM ") == "jo@example.com"
    with pytest.raises(ValidationException):
        normalize_email("jo@")


def test_default_catalogue_shape() -> None:
    policy = get_default_policy()
    assert len(policy) == len(DEFAULT_PERMISSIONS) == 63
    assert len(policy.by_group()) == 16
    assert policy.defaults_for(Role.SUPER_ADMIN) == policy.slugs
    assert policy.defaults_for(Role.ADMIN) == policy.slugs - {"signatures.sign_as_client"}
    assert policy.defaults_for(Role.CLIENT) >= {"signatures.sign_as_client"}
    assert get_default_policy() is policy


def test_policy_rejects_duplicate_slugs() -> None:
    definition = PermissionDefinition(
        slug="x.view",
        label="X",
        description="",
        feature_group="x",
        sort_order=0,
        default_roles=frozenset(),
    )
    with pytest.raises(ValueError):
        PermissionPolicy([definition, definition])


def test_platform_branding_defaults() -> None:
    assert PLATFORM_BRANDING.company_name == "STS TaxRepair"
    assert PLATFORM_BRANDING.reply_to_name == "STS TaxRepair Support"
    assert PLATFORM_BRANDING.logo_url is None
    assert PLATFORM_BRANDING.default_theme == Theme.LIGHT


def test_clean_branding_changes_normalizes() -> None:
    cleaned = clean_branding_changes(
        {
            "company_name": "  Acme ",
            "logo_url": "",
            "default_theme": "dark",
            "reply_to_email": "Help@Acme.com",
        }
    )
    assert cleaned == {
        "company_name": "Acme",
        "logo_url": None,
        "default_theme": Theme.DARK,
        "reply_to_email": "help@acme.com",
    }


def test_clean_branding_changes_reports_field() -> None:
    with pytest.raises(ValidationException) as exc_info:
        clean_branding_changes({"accent_color": "blue"})
    assert exc_info.value.details == {"field": "accent_color"}
