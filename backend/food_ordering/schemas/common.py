"""
Food Ordering Backend — Shared Pydantic Schemas
=================================================

What:  Base model with the API's camelCase convention, plus the error and
       health response models used across routes.

The API speaks camelCase (`imageUrl`, `userId`, `menuItem`) while Python code
uses snake_case. `ApiModel` bridges the two: fields are declared in
snake_case, serialized by alias, and accepted under either name on input.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Bare acknowledgement, e.g. DELETE /api/menus/{id}."""
    message: str = Field(description="Human-readable result message")


class ErrorResponse(ApiModel):
    """
    Standardized error body returned by every failing request.

    Example:
        {
            "error": "conflict",
            "message": "User with this email already exists.",
            "requestId": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(ApiModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
