"""User administration API schemas."""

from pydantic import BaseModel

from officeauth.domain.enums import Role


class RoleChangeRequest(BaseModel):
    role: Role
