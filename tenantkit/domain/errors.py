"""
Tenant Error Taxonomy

Error codes carried by `Error` results, plus the exceptions raised for
programming defects around the tenant scope.
"""

TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
TENANT_REQUIRED = "TENANT_REQUIRED"
MEMBERSHIP_NOT_FOUND = "MEMBERSHIP_NOT_FOUND"
INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"
SETTING_NOT_FOUND = "SETTING_NOT_FOUND"
INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
VALIDATION_ERROR = "VALIDATION_ERROR"
CONTEXT_MISSING = "CONTEXT_MISSING"
UNAUTHORIZED = "UNAUTHORIZED"


class TenantScopeError(Exception):
    """Tenant scope was used incorrectly (nested or missing)."""


class TenantContextMissing(TenantScopeError):
    """A tenant-scoped repository was used before a scope was established."""

    def __init__(self, repository: str):
        self.repository = repository
        super().__init__(
            f"Tenant scope not established before accessing '{repository}'"
        )


class MembershipConflict(Exception):
    """A membership insert hit a unique index.

    External identities are unique across all tenants, so this is the only
    signal that an identity is already bound elsewhere: other tenants' rows
    are invisible inside a tenant scope.
    """

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"External identity '{external_id}' already holds a membership")
