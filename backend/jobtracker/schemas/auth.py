from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from jobtracker.schemas.base import CamelModel, to_utc_iso

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=256)
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class LoginRequest(CamelModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=256)


class UserOut(CamelModel):
    id: int
    email: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def _as_utc(self, value: datetime | None) -> str | None:
        return to_utc_iso(value)


class AuthResponse(CamelModel):
    token: str
    user: UserOut
