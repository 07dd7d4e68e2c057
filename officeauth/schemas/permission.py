"""Permission API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from officeauth.domain.enums import Role, RoleAuditAction


class PermissionResponse(BaseModel):
    """One permission definition."""

    model_config = ConfigDict(from_attributes=True)

    slug: str
    label: str
    description: str
    feature_group: str
    sort_order: int


class PermissionGroupResponse(BaseModel):
    feature_group: str
    permissions: list[PermissionResponse]


class EffectivePermissionsResponse(BaseModel):
    """Permissions held by the caller's role."""

    role: Role
    permissions: list[str]


class PermissionMatrixResponse(BaseModel):
    """All permissions and, per role, which ones are held."""

    permissions: list[PermissionResponse]
    matrix: dict[Role, dict[str, bool]]


class OverrideRequest(BaseModel):
    granted: StrictBool


class BulkOverrideRequest(BaseModel):
    """Slug -> granted map applied as one unit."""

    overrides: dict[str, StrictBool] = Field(..., min_length=1)


class OverrideResultResponse(BaseModel):
    """Slugs whose stored override actually changed."""

    changed: list[str]


class RoleOverridesResponse(BaseModel):
    role: Role
    overrides: dict[str, bool]


class RoleAuditEntryResponse(BaseModel):
    """Role audit trail entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    action: RoleAuditAction
    actor_id: str
    role: Role
    permission_slug: str | None
    old_value: str | None
    new_value: str
    target_user_id: str | None
    created_at: datetime
