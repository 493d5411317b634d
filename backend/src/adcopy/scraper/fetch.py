"""Landing page fetcher.

Plain httpx GET with a Chrome-like identity and an English Accept-Language so
sites serve what a typical visitor would see. The whole request is capped by a
hard timeout (asyncio cancellation), not just httpx's per-phase timeouts.

Failures are returned as FetchError values, never raised.
"""

from __future__ import annotations

import asyncio

import httpx

from adcopy.config import settings
from adcopy.models import FetchedPage, FetchError, FetchResult
from adcopy.utils.logging import get_logger

log = get_logger("adcopy.fetch")

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def browser_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": _ACCEPT,
        "Accept-Language": settings.accept_language,
    }


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    response = await client.get(url, headers=browser_headers())
    # Read the body inside the timed section so slow bodies count too
    await response.aread()
    return response


async def fetch_html(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> FetchResult:
    """Fetch raw HTML and response headers for url.

    Non-2xx responses are returned as pages (error pages still carry lang
    markup). Non-HTML bodies are returned as text and simply yield no matches.
    """
    timeout = settings.fetch_timeout_s if timeout is None else timeout
    try:
        if client is not None:
            response = await asyncio.wait_for(_get(client, url), timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await asyncio.wait_for(_get(own_client, url), timeout=timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        log.warning(f"Fetch timed out after {timeout}s: {url}")
        return FetchError(error_type="timeout", url=url, detail=f"timed out after {timeout}s")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.warning(f"Fetch failed for {url}: {e}")
        return FetchError(error_type="transport", url=url, detail=str(e) or type(e).__name__)

    try:
        html = response.text
    except (UnicodeDecodeError, LookupError) as e:
        log.warning(f"Undecodable body from {url}: {e}")
        return FetchError(error_type="decode", url=url, detail=str(e))

    if response.status_code >= 400:
        log.info(f"Fetched {url} with HTTP {response.status_code}, extracting anyway")

    return FetchedPage(
        html=html,
        headers={k.lower(): v for k, v in response.headers.items()},
        status_code=response.status_code,
        final_url=str(response.url),
    )
