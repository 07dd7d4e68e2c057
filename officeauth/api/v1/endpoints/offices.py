"""Offices API: create, list, get, update, deactivate offices, and edit their branding."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from officeauth.api.v1.dependencies import (
    Principal,
    ensure_office_access,
    get_branding_resolver,
    get_branding_resolver_for_write,
    get_current_principal,
    get_office_registry,
    get_office_registry_for_write,
    get_permission_engine,
    require_permission,
)
from officeauth.application.services import BrandingResolver, OfficeRegistry, PermissionEngine
from officeauth.schemas.branding import BrandingResponse, BrandingUpdateRequest
from officeauth.schemas.office import OfficeCreateRequest, OfficeResponse, OfficeUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()

MANAGE_OFFICES = "admin.system"
MANAGE_BRANDING = "branding.manage"


@router.post("", response_model=OfficeResponse, status_code=201)
async def create_office(
    body: OfficeCreateRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_OFFICES))],
    registry: Annotated[OfficeRegistry, Depends(get_office_registry_for_write)],
):
    """Create an office (tenant)."""
    fields = body.model_dump(exclude_none=True)
    office = await registry.create_office(**fields)
    logger.info("Office %s (%s) created by %s", office.id, office.slug, principal.user_id)
    return OfficeResponse.model_validate(office)


@router.get("", response_model=list[OfficeResponse])
async def list_offices(
    _: Annotated[Principal, Depends(require_permission(MANAGE_OFFICES))],
    registry: Annotated[OfficeRegistry, Depends(get_office_registry)],
    active_only: bool = False,
):
    offices = await registry.list_offices(active_only=active_only)
    return [OfficeResponse.model_validate(o) for o in offices]


@router.get("/{office_id}", response_model=OfficeResponse)
async def get_office(
    office_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    registry: Annotated[OfficeRegistry, Depends(get_office_registry)],
):
    """Return an office; callers outside it need the cross-office permission."""
    await ensure_office_access(principal, office_id, engine)
    return OfficeResponse.model_validate(await registry.get_office(office_id))


@router.patch("/{office_id}", response_model=OfficeResponse)
async def update_office(
    office_id: str,
    body: OfficeUpdateRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_OFFICES))],
    registry: Annotated[OfficeRegistry, Depends(get_office_registry_for_write)],
):
    """Partially update an office; only fields present in the body change."""
    office = await registry.update_office(office_id, body.model_dump(exclude_unset=True))
    logger.info("Office %s updated by %s", office_id, principal.user_id)
    return OfficeResponse.model_validate(office)


@router.post("/{office_id}/deactivate", response_model=OfficeResponse)
async def deactivate_office(
    office_id: str,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_OFFICES))],
    registry: Annotated[OfficeRegistry, Depends(get_office_registry_for_write)],
):
    office = await registry.deactivate_office(office_id)
    logger.info("Office %s deactivated by %s", office_id, principal.user_id)
    return OfficeResponse.model_validate(office)


@router.get("/{office_id}/branding", response_model=BrandingResponse)
async def get_office_branding(
    office_id: str,
    resolver: Annotated[BrandingResolver, Depends(get_branding_resolver)],
):
    """Return the office's effective branding (public; unknown offices get the defaults)."""
    return BrandingResponse.model_validate(await resolver.resolve(office_id))


@router.put("/{office_id}/branding", response_model=BrandingResponse)
async def update_office_branding(
    office_id: str,
    body: BrandingUpdateRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_BRANDING))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    resolver: Annotated[BrandingResolver, Depends(get_branding_resolver_for_write)],
):
    """Create or merge the office's branding. Fields sent as null revert to the default."""
    await ensure_office_access(principal, office_id, engine)
    view = await resolver.upsert(
        office_id, body.model_dump(exclude_unset=True), actor_id=principal.user_id
    )
    logger.info("Branding for office %s updated by %s", office_id, principal.user_id)
    return BrandingResponse.model_validate(view)


@router.delete("/{office_id}/branding", status_code=status.HTTP_204_NO_CONTENT)
async def reset_office_branding(
    office_id: str,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_BRANDING))],
    engine: Annotated[PermissionEngine, Depends(get_permission_engine)],
    resolver: Annotated[BrandingResolver, Depends(get_branding_resolver_for_write)],
) -> None:
    """Delete the office's branding so it presents the platform defaults."""
    await ensure_office_access(principal, office_id, engine)
    if await resolver.reset(office_id):
        logger.info("Branding for office %s reset by %s", office_id, principal.user_id)
