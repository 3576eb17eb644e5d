"""Pydantic schemas for authentication flows."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from .constants import DEFAULT_REGISTER_ROLE


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str
    role: str = DEFAULT_REGISTER_ROLE


class TokenResponse(BaseModel):
    access_token: Optional[str] = None
    token_type: str = "bearer"


__all__ = ["RegisterRequest", "TokenResponse"]
