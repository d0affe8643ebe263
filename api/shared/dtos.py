"""Shared DTOs for the marketplace API."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BaseDTO(BaseModel):
    """Base DTO: camelCase on the wire, snake_case in Python."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class HealthCheckResponse(BaseDTO):
    """Health check response DTO."""
    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(default="0.1.0")
    dependencies: Dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseDTO):
    """Fixed-shape error payload returned for every failed request."""
    error: str = Field(description="Error message")
    error_code: str = Field(description="Error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MessageResponse(BaseDTO):
    """Plain acknowledgement for operations without a resource payload."""
    message: str = Field(description="Status message")
