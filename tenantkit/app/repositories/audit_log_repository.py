from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from tenantkit.domain.entities import AuditLog


class IAuditLogRepository(ABC):
    """AuditLog repository interface - tenant scoped, append only"""

    @abstractmethod
    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Append an audit log entry"""
        pass

    @abstractmethod
    async def get_paginated(
        self, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditLog], Optional[str]]:
        """Entries newest first with an opaque cursor for the next page"""
        pass
