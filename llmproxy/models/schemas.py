from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: Any = ""
    content: Any = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: list[ChatMessage]
    system_prompt: str | None = Field(default=None, alias="systemPrompt")
    api_key: str | None = Field(default=None, alias="apiKey")


class ChatResponse(BaseModel):
    content: str


class ErrorResponse(BaseModel):
    error: str
    debug: str | None = None
