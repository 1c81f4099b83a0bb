"""Account DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``UserService``.
DTOs are immutable (``frozen=True``).

- ``CreateUserDTO``: input for admin-side account creation.
- ``UpdateUserDTO``: partial update of profile, role and activation.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 8

Role = Literal["ADMIN", "USER"]


class CreateUserDTO(BaseModel):
    """New accounts log in with their email; ``role`` defaults to USER."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    password: str
    role: Role = "USER"

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        return v


class UpdateUserDTO(BaseModel):
    """Partial update; only supplied (non-``None``) fields are applied."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("is_active", "isActive"),
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name must not be blank.")
        return v.strip() if v is not None else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v
