"""
Turn an ActionResult into a JSON response with a matching status code.
"""

from fastapi import status
from fastapi.responses import JSONResponse

from readytowork.core.errors import ActionResult, ErrorCode

STATUS_BY_ERROR_CODE = {
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PLAN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_CREDITS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.SYSTEM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(result: ActionResult, success_status: int = status.HTTP_200_OK) -> int:
    if result.success:
        return success_status
    return STATUS_BY_ERROR_CODE.get(result.error_code, status.HTTP_400_BAD_REQUEST)


def action_response(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """The body is always the result object, success or not."""
    return JSONResponse(
        status_code=status_for(result, success_status),
        content=result.model_dump(mode="json", by_alias=True),
    )
