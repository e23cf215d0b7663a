from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
import logging

from tenantkit import __version__
from tenantkit.domain.errors import (
    BUSINESS_RULE_VIOLATION,
    CONTEXT_MISSING,
    VALIDATION_ERROR,
    TenantScopeError,
)
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details is not None:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    error_dict = {"code": VALIDATION_ERROR, "message": "Invalid request", "details": details}
    logger.warning(f"Validation error: {details}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_integrity_error(request: Request, exc: IntegrityError):
    # A unique index caught a race the rule checks could not see
    logger.warning(f"Integrity error: {exc.orig}")
    error_dict = {
        "code": BUSINESS_RULE_VIOLATION,
        "message": "Request conflicts with existing data",
    }
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": error_dict})


async def handle_scope_error(request: Request, exc: TenantScopeError):
    logger.critical(f"Tenant scope defect on {request.method} {request.url.path}: {exc}")
    error_dict = {"code": CONTEXT_MISSING, "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="tenantkit", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tenantkit.api.routes import (
        admin,
        audit,
        health_check,
        invitation,
        me,
        membership,
        setting,
        tenant,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(tenant.router, tags=["Tenant"])
    app.include_router(me.router, tags=["Me"])
    app.include_router(membership.router, tags=["Memberships"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(setting.router, tags=["Settings"])
    app.include_router(audit.router, tags=["Audit"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(TenantScopeError, handle_scope_error)

    return app
