from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class TenantScope:
    """Handle for an active tenant scope.

    Returned by `UnitOfWork.tenant_scope()` and held by every tenant-scoped
    repository; the repositories filter and stamp rows with `tenant_id`.
    """

    tenant_id: UUID
