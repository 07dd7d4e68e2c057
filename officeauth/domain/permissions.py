"""Default permission policy: the slug catalogue and the roles holding each slug by default.

The catalogue is static configuration. It is loaded once into an immutable
PermissionPolicy (get_default_policy) and never mutated; per-role overrides
are the only runtime-mutable permission state and live in the override store.

Agent permissions on client-bound records are scoped to assigned clients by
the API layer that consumes these checks, not here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache

from officeauth.domain.enums import Role

PRIVILEGED_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


def is_privileged(role: Role) -> bool:
    """Return True for roles that bypass permission resolution and hold every permission.

    Single source of truth for the bypass rule; call sites must not compare
    role strings themselves.
    """
    return role in PRIVILEGED_ROLES


@dataclass(frozen=True)
class PermissionDefinition:
    """One named capability (e.g. clients.view) and the roles holding it by default."""

    slug: str
    label: str
    description: str
    feature_group: str
    sort_order: int
    default_roles: frozenset[Role]


class PermissionPolicy:
    """Immutable, ordered set of permission definitions indexed by slug."""

    def __init__(self, definitions: Iterable[PermissionDefinition]) -> None:
        ordered = tuple(sorted(definitions, key=lambda d: d.sort_order))
        index: dict[str, PermissionDefinition] = {}
        for definition in ordered:
            if definition.slug in index:
                raise ValueError(f"Duplicate permission slug: {definition.slug}")
            index[definition.slug] = definition
        self._definitions = ordered
        self._index: Mapping[str, PermissionDefinition] = index
        self._slugs = frozenset(index)
        self._defaults: dict[Role, frozenset[str]] = {
            role: frozenset(d.slug for d in ordered if role in d.default_roles)
            for role in Role
        }

    @property
    def definitions(self) -> tuple[PermissionDefinition, ...]:
        """All definitions in sort order."""
        return self._definitions

    @property
    def slugs(self) -> frozenset[str]:
        """Every known permission slug."""
        return self._slugs

    def is_known(self, slug: str) -> bool:
        return slug in self._index

    def get(self, slug: str) -> PermissionDefinition | None:
        return self._index.get(slug)

    def defaults_for(self, role: Role) -> frozenset[str]:
        """Slugs the role holds before overrides are applied."""
        return self._defaults[role]

    def by_group(self) -> dict[str, list[PermissionDefinition]]:
        """Definitions grouped by feature group, groups in first-seen order."""
        groups: dict[str, list[PermissionDefinition]] = {}
        for definition in self._definitions:
            groups.setdefault(definition.feature_group, []).append(definition)
        return groups

    def __len__(self) -> int:
        return len(self._definitions)


_EVERYONE = (Role.CLIENT, Role.AGENT, Role.TAX_OFFICE, Role.ADMIN)
_STAFF = (Role.AGENT, Role.TAX_OFFICE, Role.ADMIN)
_OFFICE = (Role.TAX_OFFICE, Role.ADMIN)
_ADMIN = (Role.ADMIN,)
_CLIENT = (Role.CLIENT,)

# (slug, label, description, feature_group, default roles). super_admin is added to every row.
DEFAULT_PERMISSIONS: tuple[tuple[str, str, str, str, tuple[Role, ...]], ...] = (
    ("dashboard.view", "View Dashboard", "Access the main dashboard", "dashboard", _EVERYONE),
    ("dashboard.stats", "View Statistics", "View dashboard statistics and charts", "dashboard", _STAFF),
    ("clients.view", "View Clients", "View client list and details (Agent: assigned clients only)", "clients", _STAFF),
    ("clients.view_all", "View All Clients", "View complete client list (global access)", "clients", _OFFICE),
    ("clients.create", "Create Clients", "Add new clients", "clients", _STAFF),
    ("clients.edit", "Edit Clients", "Modify client information (Agent: assigned clients only)", "clients", _STAFF),
    ("clients.delete", "Delete Clients", "Remove clients from system", "clients", _OFFICE),
    ("clients.assign", "Assign Clients to Agent", "Assign or reassign clients to agents", "clients", _OFFICE),
    ("leads.view", "View Leads", "View lead list and details (Agent: assigned leads only)", "leads", _STAFF),
    ("leads.create", "Create Leads", "Add new leads", "leads", _STAFF),
    ("leads.edit", "Edit Leads", "Modify lead information (Agent: assigned leads only)", "leads", _STAFF),
    ("leads.convert", "Convert Leads", "Convert leads to clients", "leads", _STAFF),
    ("documents.view", "View Documents", "View uploaded documents (Agent: assigned clients only)", "documents", _EVERYONE),
    ("documents.upload", "Upload Documents", "Upload new documents", "documents", _EVERYONE),
    ("documents.download", "Download Documents", "Download documents", "documents", _EVERYONE),
    ("documents.delete", "Delete Documents", "Remove documents", "documents", _OFFICE),
    ("documents.request", "Request Documents", "Request documents from clients", "documents", _STAFF),
    ("signatures.view", "View E-Signatures", "View e-signature requests", "signatures", _EVERYONE),
    ("signatures.create", "Create E-Signature Requests", "Send Form 8879 for signature", "signatures", _STAFF),
    ("signatures.sign_as_client", "Sign as Client", "Sign e-signature requests as the taxpayer", "signatures", _CLIENT),
    ("signatures.sign_as_preparer", "Sign as Preparer", "Sign e-signature requests as the tax preparer", "signatures", _STAFF),
    ("signatures.download_pdf", "Download Signed PDFs", "Download completed Form 8879 PDFs", "signatures", _STAFF),
    ("payments.view", "View Payments", "View payment records (Agent: assigned clients only, read-only)", "payments", _STAFF),
    ("payments.request", "Request Payment", "Request payment from client (creates pending request)", "payments", _STAFF),
    ("payments.create", "Create Payments", "Add and record payment records", "payments", _OFFICE),
    ("payments.approve", "Approve Payments", "Approve pending payment requests", "payments", _OFFICE),
    ("payments.edit", "Edit Payments", "Modify payment information", "payments", _OFFICE),
    ("payments.delete", "Delete Payments", "Remove payment records", "payments", _ADMIN),
    ("appointments.view", "View Appointments", "View scheduled appointments", "appointments", _EVERYONE),
    ("appointments.create", "Create Appointments", "Schedule new appointments", "appointments", _STAFF),
    ("appointments.edit", "Edit Appointments", "Modify appointment details", "appointments", _STAFF),
    ("appointments.delete", "Delete Appointments", "Cancel appointments", "appointments", _OFFICE),
    ("deadlines.view", "View Tax Deadlines", "View tax deadline calendar", "deadlines", _STAFF),
    ("deadlines.create", "Create Deadlines", "Add new tax deadlines", "deadlines", _OFFICE),
    ("deadlines.edit", "Edit Deadlines", "Modify deadline information", "deadlines", _OFFICE),
    ("tasks.view", "View Tasks", "View task board (Agent: assigned tasks only)", "tasks", _STAFF),
    ("tasks.create", "Create Tasks", "Add new tasks", "tasks", _STAFF),
    ("tasks.edit", "Edit Tasks", "Modify task details", "tasks", _STAFF),
    ("tasks.assign", "Assign Tasks", "Assign tasks to team members", "tasks", _OFFICE),
    ("support.view", "View Support Tickets", "View support tickets", "support", _EVERYONE),
    ("support.create", "Create Support Tickets", "Submit support requests", "support", _EVERYONE),
    ("support.respond", "Respond to Tickets", "Reply to support tickets", "support", _STAFF),
    ("support.close", "Close Tickets", "Close support tickets", "support", _STAFF),
    ("support.internal_notes", "Internal Notes", "Add and view internal notes on tickets (hidden from clients)", "support", _STAFF),
    ("knowledge.view", "View Knowledge Base", "Access knowledge base articles", "knowledge", _EVERYONE),
    ("knowledge.create", "Create Articles", "Create knowledge base articles", "knowledge", _STAFF),
    ("knowledge.edit", "Edit Articles", "Edit knowledge base articles", "knowledge", _STAFF),
    ("reports.view", "View Reports", "Access reports and analytics (Agent: assigned clients only)", "reports", _STAFF),
    ("reports.export", "Export Reports", "Export report data", "reports", _OFFICE),
    ("settings.view", "View Settings", "View system settings", "settings", _OFFICE),
    ("settings.edit", "Edit Settings", "Modify system settings", "settings", _ADMIN),
    ("agents.view", "View Agents", "View agent list and details", "agents", _OFFICE),
    ("agents.create", "Create Agent", "Create new agent accounts", "agents", _OFFICE),
    ("agents.edit", "Edit Agent", "Modify agent information", "agents", _OFFICE),
    ("agents.disable", "Disable Agent", "Disable or deactivate agent accounts", "agents", _OFFICE),
    ("branding.view", "View Branding", "View office branding settings", "branding", _OFFICE),
    ("branding.manage", "Manage Office Branding", "Customize office logo, colors, and theme", "branding", _OFFICE),
    ("branding.personal_theme", "Personal Theme", "Set personal light/dark theme preference", "branding", _EVERYONE),
    ("admin.users", "Manage Users", "Manage user accounts and roles", "admin", _ADMIN),
    ("admin.permissions", "Manage Permissions", "Configure role permissions", "admin", _ADMIN),
    ("admin.audit", "View Audit Logs", "View system audit logs (Tax Office: office-scoped)", "admin", _OFFICE),
    ("admin.invites", "Manage Invites", "Create and manage staff invites (Tax Office: office-scoped)", "admin", _OFFICE),
    ("admin.system", "System Administration", "Full system administration access", "admin", _ADMIN),
)


def build_policy(
    rows: Iterable[tuple[str, str, str, str, tuple[Role, ...]]],
) -> PermissionPolicy:
    """Build a policy from catalogue rows; sort order follows row order."""
    return PermissionPolicy(
        PermissionDefinition(
            slug=slug,
            label=label,
            description=description,
            feature_group=group,
            sort_order=position,
            default_roles=frozenset(roles) | {Role.SUPER_ADMIN},
        )
        for position, (slug, label, description, group, roles) in enumerate(rows)
    )


@lru_cache
def get_default_policy() -> PermissionPolicy:
    """Return the process-wide default policy (built once on first use)."""
    return build_policy(DEFAULT_PERMISSIONS)
