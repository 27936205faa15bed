"""
Error schemas - Pydantic models for error responses
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (index, valid values, etc.)"
    )
    timestamp: datetime = Field(default_factory=_utcnow, description="When the error occurred")


class ErrorResponse(BaseModel):
    """API error response - standardized format"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "ADDRESSING_ERROR",
                "message": "Invalid layer index: 7",
                "details": {"target": "layer index", "value": 7, "valid": [0, 1, 2]},
                "timestamp": "2025-11-26T10:30:00Z"
            },
            "request_id": "req-12345"
        }
    })


class ValidationErrorResponse(BaseModel):
    """Validation error - when request body is invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: List[Dict[str, Any]] = Field(description="Per-field validation errors")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
