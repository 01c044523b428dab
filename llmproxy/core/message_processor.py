from __future__ import annotations

from typing import Any

from llmproxy.core.providers import PromptStrategy, Provider
from llmproxy.models.schemas import ChatMessage, ChatRequest, Role


DEFAULT_SYSTEM_PROMPT = "你是一个温暖、贴心的情感陪伴助手。"

ROLE_LABELS: dict[str, str] = {
    "system": "系统",
    "user": "用户",
    "assistant": "助手",
}
ASSISTANT_MARKER = f"{ROLE_LABELS['assistant']}:"

MAX_TOKENS = 200
TEMPERATURE = 0.7


def normalize_role(role: Any) -> Role:
    role = str(role)
    if role == "system":
        return "system"
    if role == "user":
        return "user"
    return "assistant"


def message_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, list):
        texts = [
            str(item.get("text", ""))
            for item in content
            if isinstance(item, dict) and item.get("type") == "text"
        ]
        return "\n".join(texts)
    return str(content)


def _chat_content(content: Any) -> Any:
    if isinstance(content, (str, list)):
        return content
    return message_text(content)


def build_text_prompt(messages: list[ChatMessage], system_prompt: str | None = None) -> str:
    lines = [
        f"{ROLE_LABELS[normalize_role(m.role)]}: {message_text(m.content)}"
        for m in messages
    ]
    conversation = "\n".join(lines)
    return f"{system_prompt or DEFAULT_SYSTEM_PROMPT}\n\n{conversation}\n{ASSISTANT_MARKER}"


def build_chat_messages(messages: list[ChatMessage], system_prompt: str | None = None) -> list[dict[str, Any]]:
    """Role-normalized messages with exactly one leading system message.

    String and content-part list contents pass through untouched. A
    caller-supplied leading system message is kept, but ``system_prompt``
    overrides its content when given.
    """
    normalized = [
        {"role": normalize_role(m.role), "content": _chat_content(m.content)}
        for m in messages
    ]

    if normalized and normalized[0]["role"] == "system":
        if system_prompt:
            normalized[0]["content"] = system_prompt
        return normalized

    return [{"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT}, *normalized]


def build_upstream_payload(provider: Provider, model: str, chat_request: ChatRequest) -> dict[str, Any]:
    system_prompt = chat_request.system_prompt or None

    if provider.strategy is PromptStrategy.TEXT:
        return {
            "inputs": build_text_prompt(chat_request.messages, system_prompt),
            "parameters": {
                "max_new_tokens": MAX_TOKENS,
                "temperature": TEMPERATURE,
                "return_full_text": False,
            },
        }

    return {
        "model": model,
        "messages": build_chat_messages(chat_request.messages, system_prompt),
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
    }
