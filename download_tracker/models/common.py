"""
Common response models.

Error schema shared by all routers for OpenAPI documentation.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: Any = Field(description="Error message or validation errors")


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Missing or rejected credentials"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
