"""Anthropic Messages API client.

The request body is forwarded as given (model, max_tokens, messages); the
response is returned as parsed JSON. Any failure raises GenerationError with
the downstream status and body so the API layer can relay it unchanged.
"""

from __future__ import annotations

from typing import Any

import httpx

from adcopy.config import settings
from adcopy.errors import ConfigurationError, GenerationError
from adcopy.utils.logging import get_logger

log = get_logger("adcopy.writer")


def first_text_block(payload: dict[str, Any]) -> str | None:
    """Text of the first ``type == "text"`` content block, if any."""
    for block in payload.get("content") or []:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text")
    return None


class MessagesClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = settings.anthropic_api_key if api_key is None else api_key
        self.base_url = (settings.anthropic_base_url if base_url is None else base_url).rstrip("/")
        self.timeout = settings.generation_timeout_s if timeout is None else timeout
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": settings.anthropic_version,
        }

    async def _post(self, body: dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}/v1/messages"
        if self._client is not None:
            return await self._client.post(url, json=body, headers=self._headers())
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, json=body, headers=self._headers())

    async def create(self, body: dict[str, Any]) -> dict[str, Any]:
        if not self.configured:
            raise ConfigurationError("API key not configured")

        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            log.warning(f"Messages API transport error: {e}")
            raise GenerationError(502, message=f"Proxy error: {e}") from e

        log.info(f"Messages API status: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(
                502 if response.is_success else response.status_code,
                message=f"Unreadable Messages API response (HTTP {response.status_code})",
            ) from e

        if not response.is_success:
            log.warning(f"Messages API error: {str(data)[:300]}")
            raise GenerationError(response.status_code, body=data)
        return data
