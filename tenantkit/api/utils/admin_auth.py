"""
Admin API Key Authentication

Validates admin API keys for tenant lifecycle endpoints.
"""

import secrets

from fastapi import Header, status

from config import ApplicationConfig
from tenantkit.api.error import ClientError
from tenantkit.domain.errors import UNAUTHORIZED
from tenantkit.libs.result import Error


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Service-to-service auth (billing, operations), separate from caller JWTs.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error(UNAUTHORIZED, "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            Error(UNAUTHORIZED, "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
