from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import Response

from llmproxy.config import Settings
from llmproxy.core.cors import error_response, preflight_response, proxy_error_response, success_response
from llmproxy.core.credentials import resolve_api_key
from llmproxy.core.errors import ProxyError
from llmproxy.core.message_processor import ASSISTANT_MARKER, build_upstream_payload
from llmproxy.core.normalizer import normalize_completion
from llmproxy.core.providers import GROQ, HUGGINGFACE, HUGGINGFACE_LEGACY, PromptStrategy, Provider
from llmproxy.core.request_parser import parse_chat_request
from llmproxy.core.upstream import UpstreamClient
from llmproxy.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _proxy(request: Request, provider: Provider) -> Response:
    settings: Settings = request.app.state.settings
    upstream: UpstreamClient = request.app.state.upstream

    try:
        chat_request = parse_chat_request(await request.body())
        api_key = resolve_api_key(provider, settings, chat_request)

        model = provider.model(settings)
        payload = build_upstream_payload(provider, model, chat_request)

        logger.info(
            f"[{provider.name}] 转发请求, model={model}, messages={len(chat_request.messages)}"
        )
        data = await asyncio.to_thread(
            upstream.post_json,
            provider.endpoint(model),
            token=api_key,
            payload=payload,
            label=provider.label,
        )

        marker = ASSISTANT_MARKER if provider.strategy is PromptStrategy.TEXT else None
        content = normalize_completion(data, label=provider.label, assistant_marker=marker)

    except ProxyError as exc:
        logger.warning(f"[{provider.name}] {exc.kind.value} ({exc.status_code}): {exc.message}")
        return proxy_error_response(exc, include_debug=settings.debug_errors)
    except Exception as exc:
        logger.exception(f"[{provider.name}] 未知异常: {exc}")
        return error_response(500, "Internal server error")

    return success_response(content)


@router.options(GROQ.path)
@router.options(HUGGINGFACE.path)
@router.options(HUGGINGFACE_LEGACY.path)
async def preflight():
    return preflight_response()


@router.post(GROQ.path)
async def groq_proxy(request: Request):
    return await _proxy(request, GROQ)


@router.post(HUGGINGFACE.path)
async def huggingface_proxy(request: Request):
    return await _proxy(request, HUGGINGFACE)


@router.post(HUGGINGFACE_LEGACY.path)
async def huggingface_legacy_proxy(request: Request):
    return await _proxy(request, HUGGINGFACE_LEGACY)
