"""User schemas for request/response validation."""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["doctor", "patient", "admin"]


class UserBase(BaseModel):
    """Base user schema with common fields."""

    email: EmailStr


class UserCreate(UserBase):
    """Schema for creating a new user."""

    password: str | None = Field(None, min_length=8, description="Omit for OAuth-only accounts")
    email_verified: bool = False
    role: Role = "doctor"


class UserUpdate(BaseModel):
    """Schema for updating a user."""

    email: EmailStr | None = None
    email_verified: bool | None = None
    role: Role | None = None
