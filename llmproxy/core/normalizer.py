"""Reduce the different upstream response bodies to one reply string.

Providers answer in one of several shapes. ``classify`` maps a decoded body to
exactly one variant below, trying them in a fixed order (OpenAI-style
``choices`` first, bare strings last), and ``normalize_completion`` turns the
variant into the text returned to the caller.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from llmproxy.core.errors import InvalidUpstreamResponseError
from llmproxy.utils.helpers import compact_json_dumps


@dataclass(frozen=True)
class ChatCompletionPayload:
    text: str


@dataclass(frozen=True)
class DirectContentPayload:
    text: str


@dataclass(frozen=True)
class GeneratedTextListPayload:
    text: str


@dataclass(frozen=True)
class GeneratedTextPayload:
    text: str


@dataclass(frozen=True)
class RawTextPayload:
    text: str


@dataclass(frozen=True)
class UnrecognizedPayload:
    raw: Any
    text: str = ""


UpstreamPayload = Union[
    ChatCompletionPayload,
    DirectContentPayload,
    GeneratedTextListPayload,
    GeneratedTextPayload,
    RawTextPayload,
    UnrecognizedPayload,
]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _first_choice_content(choices: list[Any]) -> str:
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    return _as_text(message.get("content"))


def classify(data: Any) -> UpstreamPayload:
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            return ChatCompletionPayload(_first_choice_content(choices))
        if data.get("content"):
            return DirectContentPayload(_as_text(data["content"]))

    if isinstance(data, list):
        first = data[0] if data else None
        text = first.get("generated_text") if isinstance(first, dict) else None
        return GeneratedTextListPayload(_as_text(text))

    if isinstance(data, dict) and data.get("generated_text"):
        return GeneratedTextPayload(_as_text(data["generated_text"]))

    if isinstance(data, str):
        return RawTextPayload(data)

    return UnrecognizedPayload(data)


def strip_assistant_echo(text: str, marker: str) -> str:
    # the model may echo the whole conversation; only the last turn is the reply
    if marker in text:
        text = text.split(marker)[-1].strip()
    return re.sub(rf"^{re.escape(marker)}\s*", "", text, flags=re.IGNORECASE).strip()


def normalize_completion(data: Any, *, label: str, assistant_marker: str | None = None) -> str:
    text = classify(data).text
    if assistant_marker:
        text = strip_assistant_echo(text, assistant_marker)
    text = text.strip()

    if not text:
        raise InvalidUpstreamResponseError(
            f"Invalid response from {label} API",
            debug=compact_json_dumps(data),
        )
    return text
