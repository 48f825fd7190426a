"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from eventbook.core.errors import DomainError, ErrorCode
from eventbook.schemas.common import StandardResponse, ErrorResponse

ERROR_STATUS_CODES = {
    ErrorCode.FIELD_VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_DATE_FORMAT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_TIME_FORMAT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.DUPLICATE_SLUG: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_CONSTRAINT: status.HTTP_409_CONFLICT,
    ErrorCode.DANGLING_REFERENCE: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_SLUG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data
    )
    return JSONResponse(
        content=jsonable_encoder(response),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=jsonable_encoder(response),
        status_code=status_code
    )

def domain_error_response(exc: DomainError) -> JSONResponse:
    """Map a domain error onto its HTTP status and error envelope"""
    return error_response(
        message=exc.message,
        error_code=exc.code.value,
        details=exc.details,
        status_code=ERROR_STATUS_CODES.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    )

def rate_limit_error():
    """Create rate limit error"""
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Please try again later."
    )
