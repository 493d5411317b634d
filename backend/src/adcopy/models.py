from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class StoreUnavailable(BaseModel):
    """Returned by CounterStore calls when the store cannot answer.

    reason is "unconfigured" when URL/token are missing, "transport" on network
    failure or timeout, "error" when the store replied with an error payload.
    """
    reason: Literal["unconfigured", "transport", "error"]
    detail: str = ""


# ── Usage gate decisions ────────────────────────────────────────────────────

class Allowed(BaseModel):
    count: int
    first_use: bool = False  # no quota record existed at check time


class Denied(BaseModel):
    count: int
    limit: int


class Unavailable(BaseModel):
    """Store could not be consulted. Callers fail open."""
    reason: str


QuotaDecision = Allowed | Denied | Unavailable


# ── Fetching ────────────────────────────────────────────────────────────────

class FetchedPage(BaseModel):
    html: str
    headers: dict[str, str] = {}
    status_code: int = 200
    final_url: str | None = None  # after redirects; never used for URL signals


class FetchError(BaseModel):
    """Returned by fetch_html() when the page could not be retrieved."""
    error_type: Literal["timeout", "transport", "decode"]
    url: str
    detail: str = ""


FetchResult = FetchedPage | FetchError


# ── Language signals ────────────────────────────────────────────────────────

class LanguageSignal(BaseModel):
    source: str
    code: str


class LanguageSignals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    html_lang: str | None = Field(default=None, alias="htmlLang")
    og_locale: str | None = Field(default=None, alias="ogLocale")
    header_lang: str | None = Field(default=None, alias="headerLang")
    hreflang: str | None = None
    hreflang_tags: list[str] = Field(default_factory=list, alias="hreflangTags")
    url_path_code: str | None = Field(default=None, alias="urlLang")
    url_path_code3: str | None = Field(default=None, alias="urlLang3")
    subdomain_lang: str | None = Field(default=None, alias="subdomainLang")
    tld: str | None = None
    tld_lang: str | None = Field(default=None, alias="tldLang")


class ExtractedPage(BaseModel):
    """Raw extraction output, before language arbitration."""
    signals: LanguageSignals
    title: str | None = None
    og_title: str | None = None
    meta_description: str | None = None
    og_description: str | None = None
    site_name: str | None = None
    h1: str | None = None


class Resolution(BaseModel):
    language: str
    detected_code: str


class PageSignals(BaseModel):
    """Everything the copy prompt needs to know about a landing page.

    Serialized with camelCase aliases, the shape the editor UI consumes.
    """
    model_config = ConfigDict(populate_by_name=True)

    language: str = "English"
    detected_code: str | None = Field(default=None, alias="detectedLangCode")
    title: str | None = None
    meta_description: str | None = Field(default=None, alias="metaDescription")
    site_name: str | None = Field(default=None, alias="siteName")
    h1: str | None = None
    signals: LanguageSignals | None = None
    cached: bool = False
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True)
        if data["error"] is None:
            del data["error"]
        return data


# ── Generation ──────────────────────────────────────────────────────────────

class GatedResult(BaseModel):
    gated: Literal[True] = True
    count: int
    limit: int
    message: str


class GenerationResult(BaseModel):
    """Downstream Messages API payload annotated with usage information."""
    payload: dict[str, Any]
    usage_count: int
    usage_limit: int
    gated: Literal[False] = False

    def to_wire(self) -> dict[str, Any]:
        return {
            **self.payload,
            "usage_count": self.usage_count,
            "usage_limit": self.usage_limit,
            "gated": False,
        }


GatewayResult = GenerationResult | GatedResult


class AdCopy(BaseModel):
    campaign: str = ""
    ad_group: str = Field(default="", alias="adGroup")
    headlines: list[str] = []
    descriptions: list[str] = []
    path1: str = ""
    path2: str = ""

    model_config = ConfigDict(populate_by_name=True)


class RefineRequest(BaseModel):
    current: str
    instruction: str
    limit: int = 30
    is_desc: bool = Field(default=False, alias="isDesc")
    language: str = "English"
    url: str = ""

    model_config = ConfigDict(populate_by_name=True)
