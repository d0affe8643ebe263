"""DTOs for the Users feature."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from api.shared.dtos import BaseDTO


class ContactDTO(BaseDTO):
    """Contact metadata embedded in messages and conversations."""

    id: int = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")


class UserDTO(BaseDTO):
    """User as returned by the API (password omitted)."""

    id: int = Field(description="User identifier")
    email: str = Field(description="Email address")
    name: str = Field(description="Display name")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")


class CreateUserRequest(BaseDTO):
    """Register a user. Fields are optional here so absence maps to a 400."""

    email: Optional[str] = Field(default=None, description="Email address")
    password: Optional[str] = Field(default=None, description="Password")
    name: Optional[str] = Field(default=None, description="Display name")


class UpdateUserRequest(BaseDTO):
    """Update a user's name and/or password."""

    name: Optional[str] = Field(default=None, description="New display name")
    password: Optional[str] = Field(default=None, description="New password")
