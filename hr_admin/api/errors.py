import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from hr_admin.core.errors import (
    ConflictError,
    CycleError,
    DomainError,
    InvalidInputError,
    InvalidRangeError,
    NotFoundError,
    SelfAssignmentError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidRangeError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    SelfAssignmentError: status.HTTP_409_CONFLICT,
    CycleError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": exc.message, "code": exc.code},
    )
