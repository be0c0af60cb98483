import httpx
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from tripcompanion.core.config import Settings
from tripcompanion.core.logger import logs
from tripcompanion.core.llm_providers import (
    BaseLLMProvider,
    GeminiProvider,
    OpenAIProvider,
)

@dataclass(frozen=True)
class ProviderDescriptor:
    """A chat provider: when it is usable and how to build it."""
    name: str
    is_configured: Callable[[Settings], bool]
    build: Callable[[Settings, httpx.AsyncClient], BaseLLMProvider]


# Priority order: the first configured provider wins
CHAT_PROVIDERS: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        name="gemini",
        is_configured=lambda s: bool(s.GEMINI_API_KEY),
        build=lambda s, client: GeminiProvider(
            client,
            api_key=s.GEMINI_API_KEY,
            model=s.GEMINI_MODEL,
            api_version=s.GEMINI_API_VERSION,
        ),
    ),
    ProviderDescriptor(
        name="openai",
        is_configured=lambda s: bool(s.OPENAI_API_KEY),
        build=lambda s, client: OpenAIProvider(
            client,
            api_key=s.OPENAI_API_KEY,
            model=s.OPENAI_MODEL,
        ),
    ),
)


def select_chat_provider(
    settings: Settings,
    client: httpx.AsyncClient,
    providers: tuple[ProviderDescriptor, ...] = CHAT_PROVIDERS,
) -> Optional[BaseLLMProvider]:
    """Build the highest-priority configured provider, or None if none is configured."""
    for descriptor in providers:
        if descriptor.is_configured(settings):
            provider = descriptor.build(settings, client)
            logs.log(logging.INFO, f"Using {provider.get_provider_name()} API")
            return provider
    return None
