import os
from dataclasses import dataclass
from typing import Mapping

from llmproxy.utils.helpers import blank_to_none, env_flag
from llmproxy.utils.logger import get_logger

logger = get_logger(__name__)


IS_VERCEL = bool(os.getenv("VERCEL")) or bool(os.getenv("NOW_REGION"))

DEFAULT_GROQ_MODEL = "llama-3.1-8b-instant"
DEFAULT_HUGGINGFACE_MODEL = "meta-llama/Llama-3.2-3B-Instruct"
DEFAULT_UPSTREAM_TIMEOUT = 30


@dataclass(frozen=True)
class Settings:
    groq_api_key: str | None = None
    groq_model: str = DEFAULT_GROQ_MODEL
    huggingface_api_key: str | None = None
    huggingface_model: str = DEFAULT_HUGGINGFACE_MODEL
    upstream_timeout: int = DEFAULT_UPSTREAM_TIMEOUT
    debug_errors: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    settings = Settings(
        groq_api_key=blank_to_none(env.get("GROQ_API_KEY")),
        groq_model=blank_to_none(env.get("GROQ_MODEL")) or DEFAULT_GROQ_MODEL,
        huggingface_api_key=blank_to_none(env.get("HUGGINGFACE_API_KEY")),
        huggingface_model=blank_to_none(env.get("HUGGINGFACE_MODEL")) or DEFAULT_HUGGINGFACE_MODEL,
        upstream_timeout=int(env.get("LLMPROXY_UPSTREAM_TIMEOUT") or DEFAULT_UPSTREAM_TIMEOUT),
        debug_errors=env_flag(env.get("LLMPROXY_DEBUG_ERRORS")),
    )

    if not settings.groq_api_key and not settings.huggingface_api_key:
        logger.warning(
            "[config] 未配置任何 API Key，请设置环境变量 GROQ_API_KEY 或 HUGGINGFACE_API_KEY"
        )

    return settings
