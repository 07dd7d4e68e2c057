"""User administration API: role changes, deactivation, deletion."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from officeauth.api.v1.dependencies import (
    Principal,
    get_account_service,
    get_account_service_for_write,
    require_permission,
)
from officeauth.application.services import AccountService
from officeauth.schemas.auth import AccountResponse
from officeauth.schemas.user import RoleChangeRequest

logger = logging.getLogger(__name__)

router = APIRouter()

MANAGE_USERS = "admin.users"


@router.get("/{user_id}", response_model=AccountResponse)
async def get_user(
    user_id: str,
    _: Annotated[Principal, Depends(require_permission(MANAGE_USERS))],
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    return AccountResponse.model_validate(await accounts.get_account(user_id))


@router.put("/{user_id}/role", response_model=AccountResponse)
async def change_role(
    user_id: str,
    body: RoleChangeRequest,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_USERS))],
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    """Change a user's role (recorded in the role audit trail)."""
    account = await accounts.change_role(user_id, body.role, principal.user_id)
    logger.info("Role of %s set to %s by %s", user_id, body.role.value, principal.user_id)
    return AccountResponse.model_validate(account)


@router.post("/{user_id}/deactivate", response_model=AccountResponse)
async def deactivate_user(
    user_id: str,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_USERS))],
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
):
    account = await accounts.deactivate(user_id)
    logger.info("Account %s deactivated by %s", user_id, principal.user_id)
    return AccountResponse.model_validate(account)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    principal: Annotated[Principal, Depends(require_permission(MANAGE_USERS))],
    accounts: Annotated[AccountService, Depends(get_account_service_for_write)],
) -> None:
    """Scrub the account and revoke its tokens; the row is kept."""
    await accounts.delete_account(user_id)
    logger.info("Account %s deleted by %s", user_id, principal.user_id)
