"""Schemas for the chat backend payloads."""
from __future__ import annotations

from typing import Any, Literal, Optional, Union, get_args

from pydantic import BaseModel, Field, field_validator

Role = Literal["user", "assistant"]


class SourceNode(BaseModel):
    text: str = ""
    score: Union[float, str, None] = None

    @property
    def relevance(self) -> str:
        """Score rendered with two decimals, as shown next to each source."""

        try:
            return f"{float(self.score):.2f}"
        except (TypeError, ValueError):
            return "n/a"


class ChatMessage(BaseModel):
    role: Role
    content: str = ""
    source_nodes: Optional[list[SourceNode]] = None

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str, source_nodes: list[SourceNode] | None = None) -> "ChatMessage":
        return cls(role="assistant", content=content, source_nodes=source_nodes or None)


class ChatSession(BaseModel):
    id: str
    title: Optional[str] = None
    created_at: Optional[str] = None


class SessionListResponse(BaseModel):
    sessions: list[ChatSession] = Field(default_factory=list)


class NewSessionResponse(BaseModel):
    session_id: str


class HistoryRequest(BaseModel):
    session_id: str


class HistoryResponse(BaseModel):
    history: list[ChatMessage] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _known_roles_only(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if not isinstance(entry, dict) or entry.get("role") in get_args(Role)]


class QueryRequest(BaseModel):
    query: str
    session_id: Optional[str]


class QueryResponse(BaseModel):
    answer: str
    source_nodes: Optional[list[SourceNode]] = None


class AudioResponse(BaseModel):
    transcribed: str
    answer: str
    source_nodes: Optional[list[SourceNode]] = None


__all__ = [
    "Role",
    "SourceNode",
    "ChatMessage",
    "ChatSession",
    "SessionListResponse",
    "NewSessionResponse",
    "HistoryRequest",
    "HistoryResponse",
    "QueryRequest",
    "QueryResponse",
    "AudioResponse",
]
