from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "system", "assistant"]
    content: str


class ChatRequest(BaseModel):
    # Items are forwarded upstream untouched; only list-ness is checked.
    messages: list[Any] = Field(default_factory=list)


class ChatReply(BaseModel):
    role: str = "assistant"
    content: str = ""


class ChatResponse(BaseModel):
    reply: ChatReply


class GenerateFileRequest(BaseModel):
    filename: Any
    prompt: Any


class GenerateFileResult(BaseModel):
    filename: Any
    content: str = ""


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
