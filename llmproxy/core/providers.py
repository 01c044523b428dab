from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from llmproxy.config import Settings


class PromptStrategy(str, Enum):
    TEXT = "text"
    MESSAGES = "messages"


@dataclass(frozen=True)
class Provider:
    name: str
    label: str
    path: str
    url_template: str
    strategy: PromptStrategy
    api_key_env: str
    settings_prefix: str
    allow_request_key: bool = False

    def api_key(self, settings: Settings) -> str | None:
        return getattr(settings, f"{self.settings_prefix}_api_key")

    def model(self, settings: Settings) -> str:
        return getattr(settings, f"{self.settings_prefix}_model")

    def endpoint(self, model: str) -> str:
        return self.url_template.format(model=model)


GROQ = Provider(
    name="groq",
    label="Groq",
    path="/api/groq-proxy",
    url_template="https://api.groq.com/openai/v1/chat/completions",
    strategy=PromptStrategy.MESSAGES,
    api_key_env="GROQ_API_KEY",
    settings_prefix="groq",
)

HUGGINGFACE = Provider(
    name="huggingface",
    label="Hugging Face",
    path="/api/huggingface-proxy",
    url_template="https://router.huggingface.co/v1/chat/completions",
    strategy=PromptStrategy.MESSAGES,
    api_key_env="HUGGINGFACE_API_KEY",
    settings_prefix="huggingface",
    allow_request_key=True,
)

HUGGINGFACE_LEGACY = Provider(
    name="huggingface-legacy",
    label="Hugging Face",
    path="/api/huggingface-legacy-proxy",
    url_template="https://api-inference.huggingface.co/models/{model}",
    strategy=PromptStrategy.TEXT,
    api_key_env="HUGGINGFACE_API_KEY",
    settings_prefix="huggingface",
)

PROVIDERS: dict[str, Provider] = {p.name: p for p in (GROQ, HUGGINGFACE, HUGGINGFACE_LEGACY)}
