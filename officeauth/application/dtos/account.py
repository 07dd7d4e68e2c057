"""DTOs for user accounts (Credential Store)."""

from dataclasses import dataclass
from datetime import datetime

from officeauth.domain.enums import AccountStatus, Role


@dataclass(frozen=True)
class AccountRecord:
    """Stored account including the password hash. Never leaves the application layer."""

    id: str
    email: str
    role: Role
    status: AccountStatus = AccountStatus.ACTIVE
    password_hash: str | None = None
    office_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email_verified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE


@dataclass(frozen=True)
class AccountResult:
    """Account read-model returned to callers (no password hash)."""

    id: str
    email: str
    role: Role
    status: AccountStatus
    office_id: str | None
    first_name: str | None
    last_name: str | None
    email_verified_at: datetime | None

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @classmethod
    def from_record(cls, record: AccountRecord) -> "AccountResult":
        return cls(
            id=record.id,
            email=record.email,
            role=record.role,
            status=record.status,
            office_id=record.office_id,
            first_name=record.first_name,
            last_name=record.last_name,
            email_verified_at=record.email_verified_at,
        )
