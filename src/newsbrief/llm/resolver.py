"""Provider resolution: build an LLM client from the settings document.

Every supported provider exposes an OpenAI-compatible chat completions
endpoint, so one client class serves all of them; only the base URL, the
API key variable, and the model name differ.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from newsbrief.llm.client import OpenAIClient
from newsbrief.llm.errors import LLMConfigError

if TYPE_CHECKING:
    import httpx

    from newsbrief.models.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSpec:
    """Endpoint and credential lookup for one provider."""

    base_url: str
    key_vars: tuple[str, ...]


PROVIDERS: dict[str, ProviderSpec] = {
    "openai": ProviderSpec("https://api.openai.com/v1", ("OPENAI_API_KEY",)),
    "anthropic": ProviderSpec("https://api.anthropic.com/v1", ("ANTHROPIC_API_KEY",)),
    "google": ProviderSpec(
        "https://generativelanguage.googleapis.com/v1beta/openai",
        ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    ),
}


def create_llm_client(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> OpenAIClient:
    """Build the chat client for ``settings.model_provider``.

    ``NEWSBRIEF_LLM_BASE_URL`` overrides the provider's endpoint.

    Raises:
        LLMConfigError: Unknown provider or no API key in the environment.
    """
    provider = settings.provider
    spec = PROVIDERS.get(provider)
    if spec is None:
        raise LLMConfigError(
            f"Unknown model provider: {provider}. Supported: {', '.join(PROVIDERS)}"
        )

    api_key = next((os.environ[v] for v in spec.key_vars if os.environ.get(v)), "")
    if not api_key:
        raise LLMConfigError(
            f"No API key for provider {provider}. Set {' or '.join(spec.key_vars)}."
        )

    base_url = os.environ.get("NEWSBRIEF_LLM_BASE_URL") or spec.base_url
    logger.info("Using model provider %s (%s)", provider, settings.model_name)
    return OpenAIClient(
        api_key=api_key,
        base_url=base_url,
        default_model=settings.model_name,
        transport=transport,
    )
