"""Pydantic schemas for authentication and tokens."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator, model_validator


def _normalise_email(v: str) -> str:
    v = v.strip().lower()
    if "@" not in v:
        raise ValueError("Invalid email address")
    return v


# ── Requests ────────────────────────────────────────────────────────
class RegisterRequest(BaseModel):
    email: str
    password: str
    confirm_password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def _passwords_match(self) -> RegisterRequest:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalise_email(v)


class LoginEmployeeCodeRequest(BaseModel):
    company_username: str
    employee_code: str
    password: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class ForgotPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalise_email(v)


class ResetPasswordRequest(BaseModel):
    token: str
    password: str
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> ResetPasswordRequest:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class VerifyEmailRequest(BaseModel):
    token: str


# ── Responses ───────────────────────────────────────────────────────
class TokenResponse(BaseModel):
    access_token: str
    access_token_expires_in: int
    refresh_token: str | None = None
    refresh_token_expires_in: int | None = None


class AccessTokenResponse(BaseModel):
    access_token: str
    access_token_expires_in: int


class CurrentUser(BaseModel):
    """The signed-in user as held by the session."""

    id: str | None = None
    email: str
    name: str | None = None
    role: Literal["admin", "manager", "employee", "user"] = "employee"
    company_id: str | None = None
    employee_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role in ("admin", "manager")
