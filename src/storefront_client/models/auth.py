"""Auth-related data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class User(BaseModel):
    email: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    role: UserRole = UserRole.CUSTOMER

    model_config = {"populate_by_name": True}

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class SignInPayload(BaseModel):
    email: str
    password: str


class SignUpPayload(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    password: str
    address: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")

    model_config = {"populate_by_name": True}


class SignInResult(BaseModel):
    """``data`` of a successful /auth/sign-in envelope."""
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    user: User | None = None

    model_config = {"populate_by_name": True}


class Session(BaseModel):
    """Session state as restored from the session store."""
    access_token: str | None = None
    refresh_token: str | None = None
    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)
