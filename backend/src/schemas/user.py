"""Pydantic schemas for signup, signin and profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class SignupRequest(BaseModel):
    """Body of POST /signup."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        """Passwords longer than bcrypt's input limit would be silently truncated."""
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class SigninRequest(BaseModel):
    """Body of POST /signin."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public user fields. The password hash is never serialized."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Response of signup and signin. The token is serialized as ``accessToken``."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserResponse
    access_token: str = Field(alias="accessToken")


class PhotoUploadResponse(BaseModel):
    """Response of POST /profile/photo."""

    url: str
