"""
Central error handling for the Leave Engine backend
"""
from datetime import date
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from app.models.leave import LeaveStatus, LeaveType


class LeaveCalculationError(Exception):
    """Base class for leave accounting errors raised to the caller"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidDateRangeError(LeaveCalculationError):
    """Raised when a date range starts after it ends"""

    def __init__(self, start: date, end: date, label: str = "start date"):
        super().__init__(f"Invalid date range: {label} {start} is after {end}")
        self.start = start
        self.end = end


class UnrecognizedLeaveTypeError(LeaveCalculationError):
    """Raised when a leave type is not one of the defined values"""

    def __init__(self, value: Any):
        allowed = ", ".join(t.value for t in LeaveType)
        super().__init__(f"Unrecognized leave type: {value!r}. Allowed: {allowed}")
        self.value = value


class UnrecognizedLeaveStatusError(LeaveCalculationError):
    """Raised when a leave status is not one of the defined values"""

    def __init__(self, value: Any):
        allowed = ", ".join(s.value for s in LeaveStatus)
        super().__init__(f"Unrecognized leave status: {value!r}. Allowed: {allowed}")
        self.value = value


class EmployeeNotFoundError(LeaveCalculationError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, employee_id: int):
        super().__init__(f"Employee with id {employee_id} not found")
        self.employee_id = employee_id


class LeaveRequestNotFoundError(LeaveCalculationError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, leave_id: int):
        super().__init__(f"Leave request with id {leave_id} not found")
        self.leave_id = leave_id


class LeaveStateError(LeaveCalculationError):
    """Raised when a leave request cannot move to the requested status"""

    status_code = status.HTTP_409_CONFLICT


def _error_body(request: Request, status_code: int, detail: Any) -> dict:
    return {
        "error": True,
        "status_code": status_code,
        "detail": detail,
        "path": str(request.url.path)
    }


async def leave_calculation_exception_handler(request: Request, exc: LeaveCalculationError) -> JSONResponse:
    """
    Translate domain errors into the JSON error envelope

    Args:
        request: FastAPI request object
        exc: LeaveCalculationError instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, exc.detail)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    from app.core.config import settings

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(request, 422, "Validation error: Invalid request data")
        )

    # Sanitize for JSON: e.g. ctx.error ValueError -> str
    errors = []
    for e in exc.errors():
        err = dict(e)
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {
                k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                for k, v in err["ctx"].items()
            }
        errors.append(err)
    content = _error_body(request, 422, "Validation error")
    content["errors"] = errors
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from app.core.config import settings
    import logging
    import traceback

    logger = logging.getLogger(__name__)
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(request, 500, "Internal server error")
        )

    content = _error_body(request, 500, str(exc))
    content["traceback"] = traceback.format_exc() if settings.APP_ENV == "local" else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content
    )
