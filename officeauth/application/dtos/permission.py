"""DTOs for permission resolution (no dependency on ORM)."""

from dataclasses import dataclass

from officeauth.domain.enums import Role
from officeauth.domain.permissions import PermissionDefinition


@dataclass(frozen=True)
class PermissionMatrix:
    """All permissions and, per role, whether each slug is held.

    Computed from a single snapshot of the override table.
    """

    permissions: tuple[PermissionDefinition, ...]
    matrix: dict[Role, dict[str, bool]]

    def is_granted(self, role: Role, slug: str) -> bool:
        return self.matrix.get(role, {}).get(slug, False)


@dataclass(frozen=True)
class OverrideChange:
    """One stored override change, as applied by the override store."""

    slug: str
    previous: bool | None
    granted: bool | None
