"""Cache-aside store for scraped page signals.

Entries are whole PageSignals documents written with a fixed TTL; they are
never patched in place. Any problem reading the cache counts as a miss.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from adcopy.config import settings
from adcopy.models import PageSignals, StoreUnavailable
from adcopy.store import CounterStore
from adcopy.utils.logging import DIM, GREEN, RESET, get_logger

log = get_logger("adcopy.cache")


def normalize_url(url: str) -> str:
    """Case-fold and drop a single trailing slash.

    https://A.com/x/ and https://a.com/x share one cache entry.
    """
    key = url.lower()
    if key.endswith("/"):
        key = key[:-1]
    return key


class PageCache:
    def __init__(
        self,
        store: CounterStore,
        ttl_seconds: int | None = None,
        key_prefix: str | None = None,
    ):
        self.store = store
        self.ttl_seconds = settings.cache_ttl_s if ttl_seconds is None else ttl_seconds
        self.key_prefix = settings.cache_key_prefix if key_prefix is None else key_prefix

    def key(self, url: str) -> str:
        return f"{self.key_prefix}{normalize_url(url)}"

    async def get(self, url: str) -> PageSignals | None:
        raw = await self.store.get(self.key(url))
        if raw is None or isinstance(raw, StoreUnavailable):
            return None
        try:
            return PageSignals.model_validate_json(raw)
        except ValidationError as e:
            log.warning(f"Discarding unreadable cache entry for {url}: {e.error_count()} error(s)")
            return None

    async def put(self, url: str, page: PageSignals) -> bool:
        body = page.model_copy(update={"cached": False}).model_dump_json(by_alias=True)
        written = await self.store.set_with_expiry(self.key(url), body, self.ttl_seconds)
        if isinstance(written, StoreUnavailable):
            log.warning(f"Scrape cache write skipped for {url}: store {written.reason}")
            return False
        return written

    async def get_or_compute(
        self,
        url: str,
        compute: Callable[[str], Awaitable[PageSignals]],
    ) -> PageSignals:
        cached = await self.get(url)
        if cached is not None:
            log.info(f"{GREEN}Scrape cache HIT{RESET}: {url}")
            return cached.model_copy(update={"cached": True})

        log.info(f"{DIM}Scrape cache MISS{RESET}, fetching live: {url}")
        page = await compute(url)
        if page.error is None and await self.put(url, page):
            log.info(f"Scrape cached for {self.ttl_seconds // 3600}h: {url}")
        return page.model_copy(update={"cached": False})
