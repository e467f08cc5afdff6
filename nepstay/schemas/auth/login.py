"""
Login schemas.
"""

from __future__ import annotations

from pydantic import ConfigDict, EmailStr, Field, field_validator

from nepstay.schemas.common.base import BaseCreateSchema

__all__ = ["LoginRequest"]


class LoginRequest(BaseCreateSchema):
    """
    Email/password login request.

    Passwords are compared verbatim, so whitespace is only trimmed from the
    email.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr = Field(
        ...,
        description="Admin email address",
        examples=["admin@nepstay.com"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Admin password",
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v
