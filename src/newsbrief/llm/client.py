"""Built-in OpenAI-compatible httpx client.

Provides a sync HTTP client for OpenAI-compatible chat completion APIs.
Reads configuration from constructor arguments or environment variables.
Requests are sent once; failures surface to the caller unretried.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from newsbrief.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

_AUTH_ERROR_STATUS_CODES = {401, 403}


class OpenAIClient:
    """Sync httpx client for OpenAI-compatible chat completions.

    Implements the LLMClient protocol.  Works against any endpoint that
    speaks the ``/chat/completions`` dialect (OpenAI, Anthropic's and
    Google's compatibility endpoints, local servers).

    Usage::

        with OpenAIClient(api_key="sk-...") as client:
            response = client.chat([{"role": "user", "content": "Hello"}])
            message = response["choices"][0]["message"]
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str = "gpt-4o",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the OpenAI-compatible client.

        Args:
            api_key: API key. Falls back to OPENAI_API_KEY env var.
            base_url: API base URL. Falls back to NEWSBRIEF_LLM_BASE_URL env var,
                then to https://api.openai.com/v1.
            default_model: Default model for chat requests.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            LLMConfigError: If no API key is provided or found in environment.
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        if not self._api_key:
            raise LLMConfigError(
                "No API key provided. Pass api_key= or set OPENAI_API_KEY "
                "environment variable."
            )
        self._base_url = (
            base_url
            or os.environ.get("NEWSBRIEF_LLM_BASE_URL", "https://api.openai.com/v1")
        ).rstrip("/")
        self._default_model = default_model
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
        )

    @property
    def default_model(self) -> str:
        return self._default_model

    def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            model: Model to use. Falls back to default_model.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional payload parameters (e.g. ``tools``)
                forwarded to the API.

        Returns:
            Full response dict with 'choices', 'usage', 'model', etc.

        Raises:
            LLMAuthError: On 401/403.
            LLMRateLimitError: On 429.
            LLMResponseError: On unexpected response format.
            httpx.HTTPStatusError: On other HTTP errors.
        """
        payload: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        payload.update(kwargs)

        logger.debug("POST %s/chat/completions (%d messages)", self._base_url, len(messages))
        response = self._client.post(f"{self._base_url}/chat/completions", json=payload)
        _check_status(response)

        data = response.json()
        if not isinstance(data, dict) or "choices" not in data:
            raise LLMResponseError(f"Chat response has no 'choices': {data!r}")
        return data

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _check_status(response: httpx.Response) -> None:
    """Map provider HTTP failures onto the LLM error hierarchy."""
    status = response.status_code
    if status in _AUTH_ERROR_STATUS_CODES:
        raise LLMAuthError(f"Authentication failed: HTTP {status} - {response.text}")
    if status == 429:
        raise LLMRateLimitError(
            f"Rate limited: HTTP 429 - {response.text}",
            retry_after=_retry_after(response.headers.get("Retry-After")),
        )
    response.raise_for_status()


def _retry_after(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None
