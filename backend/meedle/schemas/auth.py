"""Auth & Account Schemas — login, profile and admin block request shapes.

Invariants:
    - LoginRequest.login stripped, non-empty; password never echoed back
    - BlockRequest.blocked_until must be timezone-aware
    - duration=custom requires blocked_until; blocked_until alone implies custom
    - RegisterRequest: names and login stripped; email syntax checked; password
      8 characters to 72 UTF-8 bytes (bcrypt input limit)

Design Decisions:
    - AwareDatetime over datetime: naive instants rejected at the boundary instead
      of being guessed into some timezone
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import (
    AwareDatetime, BaseModel, EmailStr, Field, field_validator, model_validator,
)

from meedle.core.domain_types import BlockDuration, UserRole


class LoginRequest(BaseModel):
    login: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("login")
    @classmethod
    def strip_login(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("login cannot be empty or whitespace")
        return v


class RegisterRequest(BaseModel):
    """Self-registration form; the account stays inactive until confirmed."""
    full_name: str = Field(min_length=1, max_length=200)
    login: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)
    birth_date: date | None = None
    group_id: UUID | None = None

    @field_validator("full_name", "login")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password longer than 72 bytes")
        return v


class AccountProfile(BaseModel):
    """Public-facing account data."""
    id: UUID
    full_name: str
    login: str
    email: str
    role: UserRole
    group_id: UUID | None = None
    is_active: bool


class LoginResponse(BaseModel):
    message: str
    user: AccountProfile


class RegisterResponse(BaseModel):
    message: str
    user: AccountProfile


class BlockRequest(BaseModel):
    """Body of the admin toggle; ignored when the account is being unblocked."""
    reason: str | None = Field(None, max_length=500)
    duration: BlockDuration = BlockDuration.INDEFINITE
    blocked_until: AwareDatetime | None = None

    @model_validator(mode="after")
    def validate_duration_fields(self):
        if self.blocked_until is not None and self.duration == BlockDuration.INDEFINITE:
            self.duration = BlockDuration.CUSTOM
        if self.duration == BlockDuration.CUSTOM and self.blocked_until is None:
            raise ValueError("custom duration requires blocked_until")
        return self


class BlockStateResponse(BaseModel):
    id: UUID
    is_active: bool
    block_reason: str | None = None
    blocked_until: datetime | None = None
