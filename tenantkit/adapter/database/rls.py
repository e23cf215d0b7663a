"""
Row-Level-Security Policy Store

Policies gate every tenant-scoped table on the transaction-local setting
`app.current_tenant_id`. An unset or cleared setting matches no rows and
rejects every write. The tenants table is the root of isolation and is
never covered by a policy.
"""

import re
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.sql.elements import TextClause

TENANT_SCOPE_SETTING = "app.current_tenant_id"

TENANT_SCOPED_TABLES = (
    "tenant_users",
    "tenant_invitations",
    "audit_logs",
    "tenant_settings",
)

UNSCOPED_TABLES = ("tenants",)

_ROLE_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")

_SCOPE_PREDICATE = (
    f"tenant_id = NULLIF(current_setting('{TENANT_SCOPE_SETTING}', true), '')::uuid"
)


def policy_name(table: str) -> str:
    return f"{table}_tenant_isolation"


def policy_statements(table: str) -> List[str]:
    """DDL that enables, forces and installs the isolation policy on a table."""
    if table not in TENANT_SCOPED_TABLES:
        raise ValueError(f"{table} is not a tenant-scoped table")
    return [
        f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY",
        # FORCE applies the policy to the table owner too
        f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY",
        f"CREATE POLICY {policy_name(table)} ON {table} "
        f"FOR ALL USING ({_SCOPE_PREDICATE}) WITH CHECK ({_SCOPE_PREDICATE})",
    ]


def drop_policy_statements(table: str) -> List[str]:
    if table not in TENANT_SCOPED_TABLES:
        raise ValueError(f"{table} is not a tenant-scoped table")
    return [
        f"DROP POLICY IF EXISTS {policy_name(table)} ON {table}",
        f"ALTER TABLE {table} NO FORCE ROW LEVEL SECURITY",
        f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY",
    ]


def _role_identifier(role: str) -> str:
    if not _ROLE_PATTERN.match(role):
        raise ValueError(f"{role!r} is not a valid role name")
    return role


def grant_statements(role: str) -> List[str]:
    """DDL granting the application role DML on every tenant table.

    The grant is skipped with a notice when the role does not exist yet.
    The role must not own the tables, be a superuser or hold BYPASSRLS.
    """
    role = _role_identifier(role)
    tables = ", ".join(UNSCOPED_TABLES + TENANT_SCOPED_TABLES)
    return [
        "DO $$ BEGIN "
        f"IF EXISTS (SELECT 1 FROM pg_roles WHERE rolname = '{role}') THEN "
        f"GRANT USAGE ON SCHEMA public TO {role}; "
        f"GRANT SELECT, INSERT, UPDATE, DELETE ON {tables} TO {role}; "
        f"ELSE RAISE NOTICE 'role {role} does not exist, grants skipped'; "
        "END IF; END $$"
    ]


def revoke_statements(role: str) -> List[str]:
    role = _role_identifier(role)
    tables = ", ".join(UNSCOPED_TABLES + TENANT_SCOPED_TABLES)
    return [
        "DO $$ BEGIN "
        f"IF EXISTS (SELECT 1 FROM pg_roles WHERE rolname = '{role}') THEN "
        f"REVOKE SELECT, INSERT, UPDATE, DELETE ON {tables} FROM {role}; "
        "END IF; END $$"
    ]


def supports_row_level_security(dialect_name: str) -> bool:
    return dialect_name == "postgresql"


def enable_row_level_security(connection: Connection) -> bool:
    """Install policies on every scoped table. Returns False when the
    dialect has no row-level security (SQLite in tests)."""
    if not supports_row_level_security(connection.dialect.name):
        return False
    for table in TENANT_SCOPED_TABLES:
        for statement in policy_statements(table):
            connection.execute(text(statement))
    return True


def scope_statement() -> TextClause:
    """Transaction-local assignment of the scope variable.

    Bind `tenant_id` to the tenant UUID string, or to '' to clear it.
    """
    return text("SELECT set_config(:setting, :tenant_id, true)").bindparams(
        setting=TENANT_SCOPE_SETTING
    )


def current_scope_statement() -> TextClause:
    return text("SELECT current_setting(:setting, true)").bindparams(
        setting=TENANT_SCOPE_SETTING
    )
