"""
Account API schemas.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from caissier.domain.entities.user import User


class UserResponse(BaseModel):
    """Public view of a user (no password material)."""

    id: UUID
    username: str
    email: str
    phone_number: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            phone_number=user.phone_number,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class UpdateEmailRequest(BaseModel):
    password: str = Field(..., max_length=128)
    new_email: str = Field(..., max_length=254)


class DeleteAccountRequest(BaseModel):
    password: str = Field(..., max_length=128)
