# src/app/schemas/auth.py
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_RULES = (
    "Password required: 8 characters minimum, at least 1 uppercase, 1 lowercase, "
    "1 number, 1 special character, no spaces."
)


def is_strong_password(password: str) -> bool:
    return (
        len(password) >= 8
        and not any(ch.isspace() for ch in password)
        and any(ch.islower() for ch in password)
        and any(ch.isupper() for ch in password)
        and any(ch.isdigit() for ch in password)
        and any(not ch.isalnum() for ch in password)
    )


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=72)

    @field_validator("password")
    @classmethod
    def _check_strength(cls, value: str) -> str:
        if not is_strong_password(value):
            raise ValueError(PASSWORD_RULES)
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class LoginResponse(BaseModel):
    userId: str
    token: str
