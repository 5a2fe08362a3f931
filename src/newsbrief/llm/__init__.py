"""LLM client infrastructure for newsbrief.

Provides an OpenAI-compatible HTTP client, the pluggable client protocol,
and provider resolution from settings.
"""

from newsbrief.llm.client import OpenAIClient
from newsbrief.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from newsbrief.llm.protocols import LLMClient
from newsbrief.llm.resolver import PROVIDERS, create_llm_client

__all__ = [
    "OpenAIClient",
    "LLMClient",
    "create_llm_client",
    "PROVIDERS",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
