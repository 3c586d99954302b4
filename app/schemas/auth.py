"""
Auth request / response schemas.

POST /register → RegisterRequest → AuthResponse
POST /login    → LoginRequest    → AuthResponse
"""
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


class RegisterRequest(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=128, examples=["Ada Lovelace"])]
    email: EmailStr = Field(examples=["ada@example.com"])
    password: Annotated[str, Field(
        min_length=6,
        description=f"At least 6 characters, at most {PASSWORD_MAX_BYTES} bytes UTF-8.",
    )]

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if isinstance(stripped, str) and not stripped:
            raise ValueError("name must not be empty")
        return stripped

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1)]

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    user: UserOut
    token: str = Field(description="Bearer token for the Authorization header.")
    token_type: str = "bearer"
