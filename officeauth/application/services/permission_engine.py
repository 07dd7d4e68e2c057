"""Permission resolution: effective permissions per role from the default policy plus overrides.

effective(R) = defaults(R) ∪ granted-overrides(R) − revoked-overrides(R).
admin and super_admin bypass resolution and hold every permission.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime

from officeauth.application.dtos.audit import RoleAuditEntry
from officeauth.application.dtos.permission import OverrideChange, PermissionMatrix
from officeauth.application.interfaces.repositories import IOverrideStore, IRoleAuditTrail
from officeauth.domain.enums import Role, RoleAuditAction
from officeauth.domain.exceptions import (
    AuthorizationException,
    PrivilegedRoleException,
    UnknownPermissionException,
    ValidationException,
)
from officeauth.domain.permissions import (
    PermissionDefinition,
    PermissionPolicy,
    get_default_policy,
    is_privileged,
)
from officeauth.shared.utils.datetime import utc_now
from officeauth.shared.utils.generators import generate_cuid


def _audit_value(granted: bool) -> str:
    return "granted" if granted else "revoked"


def resolve_effective(
    policy: PermissionPolicy, role: Role, overrides: Mapping[str, bool]
) -> frozenset[str]:
    """Apply overrides to the role's defaults. Overrides for unknown slugs are ignored."""
    granted = {slug for slug, value in overrides.items() if value}
    revoked = {slug for slug, value in overrides.items() if not value}
    return ((policy.defaults_for(role) | granted) - revoked) & policy.slugs


class PermissionEngine:
    """Answers "may role R do S" and applies audited per-role overrides."""

    def __init__(
        self,
        override_store: IOverrideStore,
        audit_trail: IRoleAuditTrail,
        policy: PermissionPolicy | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.override_store = override_store
        self.audit_trail = audit_trail
        self.policy = policy or get_default_policy()
        self._clock = clock

    async def effective_permissions(self, role: Role | str) -> frozenset[str]:
        """Return every slug the role holds. Privileged roles get the whole catalogue."""
        role = Role.parse(role)
        if is_privileged(role):
            return self.policy.slugs
        overrides = await self.override_store.get_overrides(role)
        return resolve_effective(self.policy, role, overrides)

    async def has_permission(self, role: Role | str, slug: str) -> bool:
        """Return True if role holds slug.

        Privileged roles hold everything, including slugs not in the catalogue.
        Any other role is denied an unknown slug; this never raises for one.
        """
        role = Role.parse(role)
        if is_privileged(role):
            return True
        if not self.policy.is_known(slug):
            return False
        overrides = await self.override_store.get_overrides(role)
        if slug in overrides:
            return overrides[slug]
        return slug in self.policy.defaults_for(role)

    async def require_permission(self, role: Role | str, slug: str) -> None:
        """Raise AuthorizationException if role lacks slug."""
        if not await self.has_permission(role, slug):
            raise AuthorizationException(permission=slug)

    async def set_override(
        self, role: Role | str, slug: str, granted: bool, actor_id: str
    ) -> bool:
        """Grant or revoke slug for role. Returns False when nothing changed.

        Raises:
            PrivilegedRoleException: role is admin or super_admin.
            UnknownPermissionException: slug is not in the catalogue.
        """
        entries = await self.bulk_set_overrides(role, {slug: granted}, actor_id)
        return bool(entries)

    async def bulk_set_overrides(
        self, role: Role | str, overrides: Mapping[str, bool], actor_id: str
    ) -> list[RoleAuditEntry]:
        """Apply several overrides as one unit; nothing is written if any slug is invalid.

        Returns one audit entry per slug whose stored value changed.
        """
        for slug, granted in overrides.items():
            if not isinstance(granted, bool):
                raise ValidationException(
                    f"Override for {slug!r} must be true or false", field=slug
                )
        return await self._apply(role, dict(overrides), actor_id)

    async def clear_override(self, role: Role | str, slug: str, actor_id: str) -> bool:
        """Drop role's override for slug so the default applies again."""
        entries = await self._apply(role, {slug: None}, actor_id)
        return bool(entries)

    async def role_overrides(self, role: Role | str) -> dict[str, bool]:
        """Return the stored overrides for role (empty for privileged roles)."""
        role = Role.parse(role)
        if is_privileged(role):
            return {}
        return await self.override_store.get_overrides(role)

    async def full_matrix(self) -> PermissionMatrix:
        """Every permission and, per role, whether it is held. One override snapshot."""
        snapshot = await self.override_store.snapshot()
        matrix: dict[Role, dict[str, bool]] = {}
        for role in Role:
            if is_privileged(role):
                matrix[role] = {slug: True for slug in self.policy.slugs}
                continue
            effective = resolve_effective(self.policy, role, snapshot.get(role, {}))
            matrix[role] = {slug: slug in effective for slug in self.policy.slugs}
        return PermissionMatrix(permissions=self.policy.definitions, matrix=matrix)

    def permissions_by_group(self) -> dict[str, list[PermissionDefinition]]:
        return self.policy.by_group()

    async def _apply(
        self, role: Role | str, changes: dict[str, bool | None], actor_id: str
    ) -> list[RoleAuditEntry]:
        role = Role.parse(role)
        if is_privileged(role):
            raise PrivilegedRoleException(role.value)
        unknown = [slug for slug in changes if not self.policy.is_known(slug)]
        if unknown:
            raise UnknownPermissionException(unknown)
        if not changes:
            return []
        applied = await self.override_store.apply(role, changes)
        now = self._clock()
        return [
            await self.audit_trail.append(self._audit_entry(role, change, actor_id, now))
            for change in applied
        ]

    def _audit_entry(
        self, role: Role, change: OverrideChange, actor_id: str, now: datetime
    ) -> RoleAuditEntry:
        default = change.slug in self.policy.defaults_for(role)
        old = default if change.previous is None else change.previous
        new = default if change.granted is None else change.granted
        action = (
            RoleAuditAction.OVERRIDE_CLEARED
            if change.granted is None
            else RoleAuditAction.OVERRIDE_SET
        )
        return RoleAuditEntry(
            id=generate_cuid(),
            action=action,
            actor_id=actor_id,
            role=role,
            permission_slug=change.slug,
            old_value=_audit_value(old),
            new_value=_audit_value(new),
            created_at=now,
        )
