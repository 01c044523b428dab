from __future__ import annotations

import json

from pydantic import ValidationError

from llmproxy.core.errors import InvalidRequestError
from llmproxy.models.schemas import ChatRequest


MISSING_MESSAGES = "Invalid request: messages is required"
INVALID_JSON = "Invalid request: body must be valid JSON"


def parse_chat_request(raw: bytes | str | None) -> ChatRequest:
    if not raw:
        raise InvalidRequestError(INVALID_JSON)

    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidRequestError(INVALID_JSON) from e

    if not isinstance(data, dict) or not isinstance(data.get("messages"), list):
        raise InvalidRequestError(MISSING_MESSAGES)

    try:
        return ChatRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestError(_describe_validation_error(e)) from e


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else "body"
    if field == "messages":
        return "Invalid request: messages must be a list of {role, content} objects"
    return f"Invalid request: {field} must be a string"
