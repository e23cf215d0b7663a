from typing import NoReturn

from fastapi import status

from tenantkit.domain import errors
from tenantkit.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


CLIENT_ERROR_STATUS = {
    errors.TENANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.TENANT_REQUIRED: status.HTTP_400_BAD_REQUEST,
    errors.MEMBERSHIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.INVITATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.SETTING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.INSUFFICIENT_PERMISSIONS: status.HTTP_403_FORBIDDEN,
    errors.BUSINESS_RULE_VIOLATION: status.HTTP_409_CONFLICT,
    errors.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    errors.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


def raise_for_error(error: Error) -> NoReturn:
    """Raise the HTTP-facing exception for a use case error."""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
