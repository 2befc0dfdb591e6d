"""
Pydantic models for user data.

``UserCreate`` is the signup payload; all three fields are required and
must be non-empty.  ``UserRead`` is what services hand back; it never
carries the password hash.
"""

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, examples=["testuser"])
    email: str = Field(..., min_length=1, examples=["testuser@test.com"])


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=1, examples=["55555"])


class UserRead(UserBase):
    """Schema for reading a user."""

    id: str

    model_config = {
        "from_attributes": True,
    }
