"""User Schemas — signup/signin payloads and public user data.

Invariants:
    - SignupRequest.full_name: 1-200 chars, stripped, non-empty
    - Passwords are accepted on input only, never echoed
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from blogify.schemas.post import PostResponse


class SignupRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty or whitespace")
        return v


class SigninRequest(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=128)


class UserResponse(BaseModel):
    id: UUID
    email: str
    full_name: str
    created_at: datetime | None = None


class SigninResponse(BaseModel):
    user: UserResponse
    expires_at: datetime


class ProfileResponse(BaseModel):
    author: UserResponse
    posts: list[PostResponse]
