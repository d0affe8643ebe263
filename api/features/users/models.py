"""Models for the Users feature."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from api.features.users.entities.user import User as UserEntity


class ContactModel(BaseModel):
    """Public display metadata of a user."""

    id: int = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    class Config:
        from_attributes = True

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "ContactModel":
        return cls(id=entity.id, name=entity.name, email=entity.email)


class UserModel(ContactModel):
    """Domain model for User; never carries the password."""

    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserModel":
        return cls(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class UserCreateModel(BaseModel):
    """Model for creating a new user."""

    email: str
    password: str
    name: str

    def to_entity(self) -> UserEntity:
        return UserEntity(email=self.email, password=self.password, name=self.name)


class UserUpdateModel(BaseModel):
    """Model for updating a user; empty values keep the stored ones."""

    name: Optional[str] = None
    password: Optional[str] = None

    def changes(self) -> dict:
        return {key: value for key, value in self.model_dump().items() if value}
