import pytest

from adcopy.cache import PageCache, normalize_url
from adcopy.models import PageSignals


@pytest.fixture
def cache(store):
    return PageCache(store, ttl_seconds=86400, key_prefix="rsa:scrape:")


def _compute(page: PageSignals, calls: list):
    async def compute(url: str) -> PageSignals:
        calls.append(url)
        return page

    return compute


def test_normalize_case_and_trailing_slash():
    assert normalize_url("https://A.com/x/") == normalize_url("https://a.com/x")
    assert normalize_url("https://Shop.Example.DE/De/") == "https://shop.example.de/de"


def test_normalize_strips_only_one_slash():
    assert normalize_url("https://a.com/x//") == "https://a.com/x/"


async def test_miss_computes_and_writes_with_ttl(cache, store):
    calls = []
    page = PageSignals(language="German", detected_code="de", title="Fahrräder")
    result = await cache.get_or_compute("https://a.com/x/", _compute(page, calls))

    assert calls == ["https://a.com/x/"]
    assert result.cached is False
    assert result.language == "German"
    assert store.expires_at["rsa:scrape:https://a.com/x"] == 86400


async def test_hit_never_computes(cache):
    calls = []
    page = PageSignals(language="French", detected_code="fr")
    await cache.get_or_compute("https://A.com/x", _compute(page, calls))
    result = await cache.get_or_compute("https://a.com/x/", _compute(page, calls))

    assert len(calls) == 1
    assert result.cached is True
    assert result.language == "French"
    assert result.detected_code == "fr"


async def test_entry_expires_after_ttl(cache, store):
    calls = []
    page = PageSignals(language="French", detected_code="fr")
    await cache.get_or_compute("https://a.com", _compute(page, calls))
    store.now = 86400
    await cache.get_or_compute("https://a.com", _compute(page, calls))
    assert len(calls) == 2


async def test_store_down_still_computes(cache, store):
    store.down = True
    calls = []
    result = await cache.get_or_compute("https://a.com", _compute(PageSignals(language="Dutch"), calls))
    assert calls == ["https://a.com"]
    assert result.language == "Dutch"
    assert result.cached is False


async def test_unreadable_entry_is_a_miss(cache, store):
    store.data["rsa:scrape:https://a.com"] = "{not json"
    calls = []
    result = await cache.get_or_compute("https://a.com", _compute(PageSignals(language="Polish"), calls))
    assert calls == ["https://a.com"]
    assert result.language == "Polish"
    # Overwritten wholesale with the fresh result
    assert PageSignals.model_validate_json(store.data["rsa:scrape:https://a.com"]).language == "Polish"


async def test_failed_scrapes_are_not_cached(cache, store):
    calls = []
    await cache.get_or_compute("https://a.com", _compute(PageSignals(error="timeout"), calls))
    assert "rsa:scrape:https://a.com" not in store.data
