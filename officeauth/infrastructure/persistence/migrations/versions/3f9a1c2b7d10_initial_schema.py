"""Initial schema: office, app_user, office_branding, auth_token, role_permission_override, role_audit_log.

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-18
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "3f9a1c2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "office",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(100), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(50), nullable=True),
        sa.Column("zip_code", sa.String(20), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "default_tax_year", sa.Integer(), server_default=sa.text("2024"), nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("role", sa.String(20), server_default=sa.text("'client'"), nullable=False),
        sa.Column("office_id", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), server_default=sa.text("'active'"), nullable=False),
        sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["office_id"], ["office.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint(
            "role IN ('client', 'agent', 'tax_office', 'admin', 'super_admin')",
            name="ck_app_user_role",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'deactivated', 'scrubbed')",
            name="ck_app_user_status",
        ),
    )
    op.create_index(op.f("ix_app_user_office_id"), "app_user", ["office_id"], unique=False)

    op.create_table(
        "office_branding",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("office_id", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("logo_url", sa.String(500), nullable=True),
        sa.Column("primary_color", sa.String(20), nullable=True),
        sa.Column("secondary_color", sa.String(20), nullable=True),
        sa.Column("accent_color", sa.String(20), nullable=True),
        sa.Column("default_theme", sa.String(10), nullable=True),
        sa.Column("reply_to_email", sa.String(255), nullable=True),
        sa.Column("reply_to_name", sa.String(255), nullable=True),
        sa.Column("updated_by_user_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["office_id"], ["office.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["updated_by_user_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("office_id"),
    )

    op.create_table(
        "auth_token",
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("kind", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resend_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("token"),
        sa.CheckConstraint(
            "kind IN ('email_verification', 'password_reset')",
            name="ck_auth_token_kind",
        ),
    )
    op.create_index("ix_auth_token_user_kind", "auth_token", ["user_id", "kind"], unique=False)
    op.create_index("ix_auth_token_expires_at", "auth_token", ["expires_at"], unique=False)

    op.create_table(
        "role_permission_override",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("permission_slug", sa.String(100), nullable=False),
        sa.Column("granted", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role", "permission_slug", name="uq_role_permission_override"),
    )
    op.create_index(
        op.f("ix_role_permission_override_role"),
        "role_permission_override",
        ["role"],
        unique=False,
    )

    op.create_table(
        "role_audit_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("permission_slug", sa.String(100), nullable=True),
        sa.Column("old_value", sa.String(50), nullable=True),
        sa.Column("new_value", sa.String(50), nullable=False),
        sa.Column("target_user_id", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_role_audit_log_actor_id"), "role_audit_log", ["actor_id"], unique=False)
    op.create_index(op.f("ix_role_audit_log_role"), "role_audit_log", ["role"], unique=False)
    op.create_index(
        op.f("ix_role_audit_log_created_at"), "role_audit_log", ["created_at"], unique=False
    )
    # Append-only at the database level as well as in the ORM.
    op.execute(
        """
        CREATE OR REPLACE FUNCTION role_audit_log_immutable() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'role_audit_log is append-only';
        END;
        $$ LANGUAGE plpgsql;
        """
    )
    op.execute(
        """
        CREATE TRIGGER role_audit_log_no_update_delete
        BEFORE UPDATE OR DELETE ON role_audit_log
        FOR EACH ROW EXECUTE FUNCTION role_audit_log_immutable();
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS role_audit_log_no_update_delete ON role_audit_log")
    op.execute("DROP FUNCTION IF EXISTS role_audit_log_immutable()")
    op.drop_index(op.f("ix_role_audit_log_created_at"), table_name="role_audit_log")
    op.drop_index(op.f("ix_role_audit_log_role"), table_name="role_audit_log")
    op.drop_index(op.f("ix_role_audit_log_actor_id"), table_name="role_audit_log")
    op.drop_table("role_audit_log")
    op.drop_index(op.f("ix_role_permission_override_role"), table_name="role_permission_override")
    op.drop_table("role_permission_override")
    op.drop_index("ix_auth_token_expires_at", table_name="auth_token")
    op.drop_index("ix_auth_token_user_kind", table_name="auth_token")
    op.drop_table("auth_token")
    op.drop_table("office_branding")
    op.drop_index(op.f("ix_app_user_office_id"), table_name="app_user")
    op.drop_table("app_user")
    op.drop_table("office")
