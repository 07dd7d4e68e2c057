"""Permissions API: catalogue, caller's permissions, role matrix, overrides, audit trail."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from officeauth.api.v1.dependencies import (
    Principal,
    get_current_principal,
    get_permission_engine,
    get_permission_engine_for_write,
    get_role_audit_trail,
    require_permission,
)
from officeauth.application.interfaces.repositories import IRoleAuditTrail
from officeauth.application.services import PermissionEngine
from officeauth.domain.enums import Role
from officeauth.schemas.permission import (
    BulkOverrideRequest,
    EffectivePermissionsResponse,
    OverrideRequest,
    OverrideResultResponse,
    PermissionGroupResponse,
    PermissionMatrixResponse,
    PermissionResponse,
    RoleAuditEntryResponse,
    RoleOverridesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MANAGE_PERMISSIONS = "admin.permissions"
VIEW_AUDIT = "admin.audit"


@router.get("", response_model=list[PermissionGroupResponse])
async def list_permissions(
    _: Annotated[Principal, Depends(get_current_principal)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """Return the permission catalogue grouped by feature."""
    return [
        PermissionGroupResponse(
            feature_group=group,
            permissions=[PermissionResponse.model_validate(d) for d in definitions],
        )
        for group, definitions in engine.permissions_by_group().items()
    ]


@router.get("/me", response_model=EffectivePermissionsResponse)
async def my_permissions(
    principal: Annotated[Principal, Depends(get_current_principal)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """Return the slugs held by the caller's role (used by the UI to show or hide screens)."""
    effective = await engine.effective_permissions(principal.role)
    return EffectivePermissionsResponse(role=principal.role, permissions=sorted(effective))


@router.get("/matrix", response_model=PermissionMatrixResponse)
async def permission_matrix(
    _: Annotated[Principal, Depends(require_permission(MANAGE_PERMISSIONS))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """Return every permission and, per role, whether it is held."""
    result = await engine.full_matrix()
    return PermissionMatrixResponse(
        permissions=[PermissionResponse.model_validate(d) for d in result.permissions],
        matrix=result.matrix,
    )


@router.get("/roles/{role}/overrides", response_model=RoleOverridesResponse)
async def role_overrides(
    role: Role,
    _: Annotated[Principal, Depends(require_permission(MANAGE_PERMISSIONS))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
):
    """Return the overrides stored for role."""
    return RoleOverridesResponse(role=role, overrides=await engine.role_overrides(role))


@router.put("/roles/{role}", response_model=OverrideResultResponse)
async def bulk_set_overrides(
    role: Role,
    body: BulkOverrideRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_PERMISSIONS))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine_for_write)],
):
    """Grant or revoke several permissions for role in one change."""
    entries = await engine.bulk_set_overrides(role, body.overrides, principal.user_id)
    changed = [e.permission_slug for e in entries if e.permission_slug]
    if changed:
        logger.info(
            "Permission overrides for %s changed by %s: %s",
            role.value,
            principal.user_id,
            ", ".join(changed),
        )
    return OverrideResultResponse(changed=changed)


@router.put("/roles/{role}/{slug}", response_model=OverrideResultResponse)
async def set_override(
    role: Role,
    slug: str,
    body: OverrideRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_PERMISSIONS))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine_for_write)],
):
    """Grant or revoke one permission for role."""
    changed = await engine.set_override(role, slug, body.granted, principal.user_id)
    if changed:
        logger.info(
            "Permission %s %s for %s by %s",
            slug,
            "granted" if body.granted else "revoked",
            role.value,
            principal.user_id,
        )
    return OverrideResultResponse(changed=[slug] if changed else [])


@router.delete("/roles/{role}/{slug}", response_model=OverrideResultResponse)
async def clear_override(
    role: Role,
    slug: str,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_PERMISSIONS))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine_for_write)],
):
    """Remove role's override for slug so the default applies."""
    changed = await engine.clear_override(role, slug, principal.user_id)
    if changed:
        logger.info("Permission override %s cleared for %s by %s", slug, role.value, principal.user_id)
    return OverrideResultResponse(changed=[slug] if changed else [])


@router.get("/audit", response_model=list[RoleAuditEntryResponse])
async def role_audit_log(
    _: Annotated[Principal, Depends(require_permission(VIEW_AUDIT))],
    audit: Annotated[IRoleAuditTrail, Depends(get_role_audit_trail)],
    role: Role | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
):
    """Return role and permission changes, newest first."""
    entries = await audit.list_entries(role=role, limit=limit)
    return [RoleAuditEntryResponse.model_validate(e) for e in entries]
