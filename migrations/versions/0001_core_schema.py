"""core tenant schema with row-level security

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from datetime import UTC, datetime
from typing import Sequence, Union
from uuid import uuid4

from alembic import op
import sqlalchemy as sa

from config import ApplicationConfig
from tenantkit.adapter.database.rls import (
    TENANT_SCOPED_TABLES,
    drop_policy_statements,
    grant_statements,
    policy_statements,
    revoke_statements,
    supports_row_level_security,
)

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TIMESTAMPED_TABLES = ("tenants", "tenant_users", "tenant_invitations", "tenant_settings")

tenant_status = sa.Enum("active", "suspended", "cancelled", name="tenantstatus")
membership_role = sa.Enum("owner", "admin", "member", "viewer", name="membershiprole")
membership_status = sa.Enum("active", "suspended", "cancelled", name="membershipstatus")
invitation_status = sa.Enum("pending", "accepted", "expired", "revoked", name="invitationstatus")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _tenant_fk():
    return sa.Column(
        "tenant_id",
        sa.Uuid(),
        sa.ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    bind = op.get_bind()
    is_postgres = supports_row_level_security(bind.dialect.name)

    tenants = op.create_table(
        "tenants",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("slug", sa.String(length=50), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("status", tenant_status, nullable=False),
        sa.Column("settings", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_tenants_status", "tenants", ["status"])
    op.create_index("idx_tenants_created_at", "tenants", ["created_at"])

    op.create_table(
        "tenant_users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("external_id", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("role", membership_role, nullable=False),
        sa.Column("status", membership_status, nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tenant_users_tenant_id", "tenant_users", ["tenant_id"])
    op.create_index(
        "idx_tenant_users_external_id", "tenant_users", ["external_id"], unique=True
    )
    op.create_index(
        "idx_tenant_users_tenant_email", "tenant_users", ["tenant_id", "email"], unique=True
    )
    op.create_index(
        "idx_tenant_users_single_owner",
        "tenant_users",
        ["tenant_id"],
        unique=True,
        postgresql_where=sa.text("role = 'owner'"),
        sqlite_where=sa.text("role = 'owner'"),
    )
    op.create_index("idx_tenant_users_role", "tenant_users", ["role"])
    op.create_index("idx_tenant_users_status", "tenant_users", ["status"])

    op.create_table(
        "tenant_invitations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", membership_role, nullable=False),
        sa.Column(
            "invited_by",
            sa.Uuid(),
            sa.ForeignKey("tenant_users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("token", sa.String(length=255), nullable=False, unique=True),
        sa.Column("status", invitation_status, nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("accepted_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tenant_invitations_tenant_id", "tenant_invitations", ["tenant_id"])
    op.create_index("ix_tenant_invitations_email", "tenant_invitations", ["email"])
    op.create_index("idx_tenant_invitations_status", "tenant_invitations", ["status"])
    op.create_index("idx_tenant_invitations_expires_at", "tenant_invitations", ["expires_at"])
    op.create_index(
        "idx_tenant_invitations_pending_email",
        "tenant_invitations",
        ["tenant_id", "email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("tenant_users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("resource_type", sa.String(length=50), nullable=True),
        sa.Column("resource_id", sa.String(length=100), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_logs_tenant_id", "audit_logs", ["tenant_id"])
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("idx_audit_logs_action", "audit_logs", ["action"])
    op.create_index("idx_audit_logs_resource_type", "audit_logs", ["resource_type"])
    op.create_index("idx_audit_logs_created_at", "audit_logs", ["created_at"])

    op.create_table(
        "tenant_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tenant_settings_tenant_id", "tenant_settings", ["tenant_id"])
    op.create_index(
        "idx_tenant_settings_tenant_key", "tenant_settings", ["tenant_id", "key"], unique=True
    )

    if is_postgres:
        op.execute(
            """
            CREATE OR REPLACE FUNCTION update_updated_at_column()
            RETURNS TRIGGER AS $$
            BEGIN
                NEW.updated_at = (now() AT TIME ZONE 'utc');
                RETURN NEW;
            END;
            $$ LANGUAGE plpgsql
            """
        )
        for table in TIMESTAMPED_TABLES:
            op.execute(
                f"CREATE TRIGGER update_{table}_updated_at BEFORE UPDATE ON {table} "
                "FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()"
            )
        for table in TENANT_SCOPED_TABLES:
            for statement in policy_statements(table):
                op.execute(statement)
        for statement in grant_statements(ApplicationConfig.APP_DB_ROLE):
            op.execute(statement)

    now = datetime.now(UTC).replace(tzinfo=None)
    op.bulk_insert(
        tenants,
        [
            {
                "id": uuid4(),
                "slug": "default",
                "name": "Default Tenant",
                "status": "active",
                "settings": {"theme": "light", "timezone": "UTC"},
                "created_at": now,
                "updated_at": now,
            }
        ],
    )


def downgrade() -> None:
    bind = op.get_bind()
    is_postgres = supports_row_level_security(bind.dialect.name)

    if is_postgres:
        for statement in revoke_statements(ApplicationConfig.APP_DB_ROLE):
            op.execute(statement)
        for table in TENANT_SCOPED_TABLES:
            for statement in drop_policy_statements(table):
                op.execute(statement)
        for table in TIMESTAMPED_TABLES:
            op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
        op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_table("tenant_settings")
    op.drop_table("audit_logs")
    op.drop_table("tenant_invitations")
    op.drop_table("tenant_users")
    op.drop_table("tenants")

    if is_postgres:
        for enum in (invitation_status, membership_status, membership_role, tenant_status):
            enum.drop(bind, checkfirst=True)
