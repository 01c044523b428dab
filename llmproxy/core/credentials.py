from __future__ import annotations

from llmproxy.config import Settings
from llmproxy.core.errors import MissingCredentialError
from llmproxy.core.providers import Provider
from llmproxy.models.schemas import ChatRequest
from llmproxy.utils.helpers import blank_to_none
from llmproxy.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_api_key(provider: Provider, settings: Settings, chat_request: ChatRequest) -> str:
    """Return the bearer token for ``provider``.

    The configured key always wins. Providers that allow it fall back to the
    ``apiKey`` the caller sent in the body, so a deployment without a key of
    its own still works for callers that bring one.
    """
    api_key = provider.api_key(settings)
    if api_key:
        return api_key

    if provider.allow_request_key:
        api_key = blank_to_none(chat_request.api_key)
        if api_key:
            logger.info(f"[resolve_api_key] {provider.name} 未配置 {provider.api_key_env}，使用请求中的 apiKey")
            return api_key

    message = f"API Key not configured. Please set {provider.api_key_env} in environment variables"
    if provider.allow_request_key:
        message += " or provide apiKey in request"
    raise MissingCredentialError(message + ".")
