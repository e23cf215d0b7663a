from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import ApplicationConfig
from tenantkit.adapter.database.engine import create_engine, create_session_factory
from tenantkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantkit.api.error import ClientError, raise_for_error
from tenantkit.api.utils.jwt import verify_jwt
from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.tenant_resolver import (
    RequestSnapshot,
    TenantResolver,
    TenantResolverConfig,
)
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.context import ResolveTenantContextUseCase, ResolveTenantUseCase
from tenantkit.domain.entities import Tenant
from tenantkit.domain.errors import UNAUTHORIZED
from tenantkit.libs.result import Error

engine = create_engine(ApplicationConfig.DB_URI, echo=False)

AsyncSessionLocal = create_session_factory(engine)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_tenant_resolver() -> TenantResolver:
    return TenantResolver(TenantResolverConfig.from_config(ApplicationConfig))


def get_request_snapshot(request: Request) -> RequestSnapshot:
    return RequestSnapshot(
        headers={key.lower(): value for key, value in request.headers.items()},
        host=request.headers.get("host"),
        query=dict(request.query_params),
        path=request.url.path,
    )


async def get_caller_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CallerIdentity:
    """
    Dependency to extract and verify the caller's bearer token.

    Returns:
        CallerIdentity built from the `sub` and `email` claims

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error(UNAUTHORIZED, "Bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error(UNAUTHORIZED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return CallerIdentity(external_id=payload["sub"], email=payload.get("email"))


async def get_current_tenant(
    snapshot: RequestSnapshot = Depends(get_request_snapshot),
    uow: UnitOfWork = Depends(get_unit_of_work),
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> Tenant:
    """Tenant named by the request, for callers that are not members yet."""
    result = await ResolveTenantUseCase(uow, resolver).execute(snapshot)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def get_tenant_context(
    request: Request,
    snapshot: RequestSnapshot = Depends(get_request_snapshot),
    caller: CallerIdentity = Depends(get_caller_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> TenantContext:
    """
    Dependency binding the request to a tenant and the caller's membership.

    Raises:
        ClientError: 400 TENANT_REQUIRED, 404 TENANT_NOT_FOUND or
            MEMBERSHIP_NOT_FOUND
    """
    result = await ResolveTenantContextUseCase(uow, resolver).execute(
        snapshot,
        caller,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


def get_client_ip(request: Request):
    return request.client.host if request.client else None
