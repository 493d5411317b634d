"""Upstash Redis REST client used for usage counters and the scrape cache.

Each command is a single POST of a JSON array (``["INCR", key]``) to the REST
endpoint; the reply is ``{"result": ...}`` or ``{"error": "..."}``.

Nothing here raises. An unconfigured or unreachable store answers every call
with a StoreUnavailable value; callers pick the fallback.
No retries at this layer.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from adcopy.config import settings
from adcopy.models import StoreUnavailable
from adcopy.utils.logging import get_logger

log = get_logger("adcopy.store")


class CounterStore:
    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._url = (settings.upstash_redis_rest_url if url is None else url).rstrip("/")
        self._token = settings.upstash_redis_rest_token if token is None else token
        self._timeout = settings.store_timeout_s if timeout is None else timeout
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._url and self._token)

    async def command(self, *args: Any) -> Any:
        """Run one Redis command. Returns the result or StoreUnavailable."""
        if not self.configured:
            return StoreUnavailable(reason="unconfigured", detail="store URL/token not set")

        body = [str(a) for a in args]
        try:
            response = await asyncio.wait_for(self._post(body), timeout=self._timeout)
        except asyncio.TimeoutError:
            log.warning(f"Store {args[0]} timed out after {self._timeout}s")
            return StoreUnavailable(reason="transport", detail="timeout")
        except httpx.HTTPError as e:
            log.warning(f"Store {args[0]} failed: {e}")
            return StoreUnavailable(reason="transport", detail=str(e))

        try:
            data = response.json()
        except ValueError:
            log.warning(f"Store {args[0]} returned non-JSON body (HTTP {response.status_code})")
            return StoreUnavailable(reason="error", detail=f"HTTP {response.status_code}")

        if not isinstance(data, dict) or "error" in data or "result" not in data:
            detail = data.get("error", "") if isinstance(data, dict) else str(data)
            log.warning(f"Store {args[0]} error: {detail}")
            return StoreUnavailable(reason="error", detail=str(detail))
        return data["result"]

    async def _post(self, body: list[str]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._token}"}
        if self._client is not None:
            return await self._client.post(self._url, json=body, headers=headers)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self._url, json=body, headers=headers)

    async def get(self, key: str) -> str | None | StoreUnavailable:
        result = await self.command("GET", key)
        if isinstance(result, StoreUnavailable) or result is None:
            return result
        return str(result)

    async def set_with_expiry(
        self,
        key: str,
        value: str | int,
        ttl_seconds: int,
        only_if_absent: bool = False,
    ) -> bool | StoreUnavailable:
        """SET key value EX ttl [NX]. False means NX found an existing key."""
        args: list[Any] = ["SET", key, value, "EX", ttl_seconds]
        if only_if_absent:
            args.append("NX")
        result = await self.command(*args)
        if isinstance(result, StoreUnavailable):
            return result
        return result == "OK"

    async def incr(self, key: str) -> int | StoreUnavailable:
        """Atomic INCR. Leaves any existing TTL untouched."""
        result = await self.command("INCR", key)
        if isinstance(result, StoreUnavailable):
            return result
        try:
            return int(result)
        except (TypeError, ValueError):
            return StoreUnavailable(reason="error", detail=f"INCR returned {result!r}")

    async def expire(self, key: str, ttl_seconds: int) -> bool | StoreUnavailable:
        result = await self.command("EXPIRE", key, ttl_seconds)
        if isinstance(result, StoreUnavailable):
            return result
        return result == 1
