"""Schemas for the document endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Manual(BaseModel):
    file_name: str


class ManualListResponse(BaseModel):
    manuals: list[Manual] = Field(default_factory=list)

    @field_validator("manuals", mode="before")
    @classmethod
    def _coerce_manuals(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


__all__ = ["Manual", "ManualListResponse"]
