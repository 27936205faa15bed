"""
Error handling middleware for API

Converts exceptions into ErrorResponse JSON:
- PerformanceError subclasses → status by error code
- Request validation errors → 422 with per-field details
- Anything else → 500
"""

import uuid
from datetime import datetime, timezone
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from models.enums import LogCategory
from models.errors import (
    AddressingError,
    ConfigurationError,
    InvalidIntervalError,
    PerformanceError,
    SwitchInProgressError,
    UnknownKindError,
)
from utils.logger import get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.API)

STATUS_BY_CODE: Dict[str, int] = {
    AddressingError.code: status.HTTP_404_NOT_FOUND,
    UnknownKindError.code: status.HTTP_404_NOT_FOUND,
    InvalidIntervalError.code: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SwitchInProgressError.code: status.HTTP_409_CONFLICT,
    ConfigurationError.code: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: PerformanceError) -> int:
    return STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error ({request_id}): {len(errors)} errors", path=request.url.path)

        validation_errors = [
            {
                # Drop the "body" / "path" prefix
                "field": ".".join(str(x) for x in error["loc"][1:]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in errors
        ]

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
                timestamp=_now(),
            ),
            validation_errors=validation_errors,
            request_id=request_id,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder(response),
        )

    @app.exception_handler(PerformanceError)
    async def performance_exception_handler(request: Request, exc: PerformanceError):
        request_id = str(uuid.uuid4())
        status_code = status_for(exc)

        log.warn(f"{exc.code} ({request_id}): {exc.message}", path=request.url.path, status=status_code)

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=Serializer.to_jsonable(exc.details),
                timestamp=_now(),
            ),
            request_id=request_id,
        )
        return JSONResponse(status_code=status_code, content=jsonable_encoder(response))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error ({request_id}): {type(exc).__name__}: {exc}",
            path=request.url.path,
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
                timestamp=_now(),
            ),
            request_id=request_id,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=jsonable_encoder(response),
        )
