"""Login request/response models.

The login endpoint speaks snake_case, so these models do not use the camelCase
alias generator.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class LoginRequest(BaseModel):
    """Body of ``POST /login``: student number and name concatenated."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_name: str

    @field_validator("user_name")
    @classmethod
    def _user_name_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("user_name must be non-empty")
        return value


class LoginResponse(BaseModel):
    """Identity assigned by the server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str
    user_name: str

    @field_validator("user_id", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: object) -> object:
        # The server may hand out numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
