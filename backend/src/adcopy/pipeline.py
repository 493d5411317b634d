"""Landing page acquisition: cache → fetch → extract → resolve → cache write.

acquire() always returns a PageSignals. When the page cannot be fetched the
result is the English default with an ``error`` message attached, so copy
generation can still go ahead on the URL alone.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from adcopy.cache import PageCache
from adcopy.models import FetchError, FetchResult, PageSignals
from adcopy.scraper.fetch import fetch_html
from adcopy.store import CounterStore
from adcopy.text.language import LanguageResolver
from adcopy.text.signals import SignalExtractor
from adcopy.utils.logging import get_logger

log = get_logger("adcopy.pipeline")

Fetcher = Callable[[str], Awaitable[FetchResult]]


def default_page(error: str) -> PageSignals:
    return PageSignals(
        language="English",
        detected_code=None,
        title=None,
        meta_description=None,
        site_name=None,
        h1=None,
        error=error,
    )


class AcquisitionPipeline:
    def __init__(
        self,
        cache: PageCache | None = None,
        fetcher: Fetcher = fetch_html,
        extractor: SignalExtractor | None = None,
        resolver: LanguageResolver | None = None,
    ):
        self.cache = cache if cache is not None else PageCache(CounterStore())
        self.fetcher = fetcher
        self.extractor = extractor or SignalExtractor()
        self.resolver = resolver or LanguageResolver()

    async def acquire(self, url: str) -> PageSignals:
        return await self.cache.get_or_compute(url, self.scrape)

    async def scrape(self, url: str) -> PageSignals:
        """Live scrape, bypassing the cache."""
        try:
            fetched = await self.fetcher(url)
            if isinstance(fetched, FetchError):
                return default_page(f"{fetched.error_type}: {fetched.detail}")

            page = self.extractor.extract(fetched.html, fetched.headers, url)
            resolution = self.resolver.resolve(page.signals)
        except Exception as e:
            log.warning(f"Scrape error for {url}: {e}")
            return default_page(str(e) or type(e).__name__)

        log.info(f"Resolved {url} → {resolution.language} ({resolution.detected_code})")
        return PageSignals(
            language=resolution.language,
            detected_code=resolution.detected_code,
            title=page.og_title or page.title,
            meta_description=page.og_description or page.meta_description,
            site_name=page.site_name,
            h1=page.h1,
            signals=page.signals,
        )
