"""Language and metadata signals pulled from raw HTML, headers and the URL.

Extraction is regex based. Every signal is optional; a rule that finds nothing
yields None.

Meta tags are matched by rules with two alternatives, identifying attribute
before ``content`` and ``content`` before it.

URL signals (path code, subdomain, TLD) are always read from the URL the user
typed, never from the post-redirect URL.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlsplit

from adcopy.models import ExtractedPage, LanguageSignals
from adcopy.text.normalize import clean_optional, strip_tags
from adcopy.text.tables import ISO3_TO_ISO2, PATH_CODES, SUBDOMAIN_CODES, TLD_LANGUAGES


@dataclass(frozen=True)
class ExtractionRule:
    """A named list of alternative patterns; the first one that matches wins."""
    name: str
    patterns: tuple[re.Pattern[str], ...]

    def first(self, html: str) -> str | None:
        for pattern in self.patterns:
            m = pattern.search(html)
            if m:
                return m.group(1)
        return None


def meta_rule(name: str, attr: str, key: str, min_len: int = 1) -> ExtractionRule:
    """Rule for <meta {attr}="{key}" content="..."> in either attribute order."""
    key_re = re.escape(key)
    value = rf"([^\"']{{{min_len},}}?)"
    return ExtractionRule(
        name,
        (
            re.compile(
                rf"<meta[^>]+{attr}=[\"']{key_re}[\"'][^>]+content=[\"']{value}[\"']",
                re.IGNORECASE,
            ),
            re.compile(
                rf"<meta[^>]+content=[\"']{value}[\"'][^>]+{attr}=[\"']{key_re}[\"']",
                re.IGNORECASE,
            ),
        ),
    )


HTML_LANG = ExtractionRule(
    "html_lang", (re.compile(r"<html[^>]+lang=[\"']([^\"']+)[\"']", re.IGNORECASE),)
)
OG_LOCALE = meta_rule("og_locale", "property", "og:locale")
OG_TITLE = meta_rule("og_title", "property", "og:title")
OG_DESCRIPTION = meta_rule("og_description", "property", "og:description")
OG_SITE_NAME = meta_rule("og_site_name", "property", "og:site_name")
# Short descriptions are usually placeholders ("Home", "...")
META_DESCRIPTION = meta_rule("meta_description", "name", "description", min_len=10)
TITLE = ExtractionRule(
    "title", (re.compile(r"<title[^>]*>([^<]{3,})</title>", re.IGNORECASE),)
)
# Inner HTML; the length check happens after tags are stripped
H1 = ExtractionRule(
    "h1", (re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL),)
)

RULES: tuple[ExtractionRule, ...] = (
    HTML_LANG, OG_LOCALE, OG_TITLE, OG_DESCRIPTION, OG_SITE_NAME, META_DESCRIPTION, TITLE, H1,
)

_HREFLANG_RE = re.compile(r"hreflang=[\"']([^\"']+)[\"']", re.IGNORECASE)
# Lookaheads so adjacent segments (/faq/deu/) are all candidates
_PATH2_RE = re.compile(r"/([a-z]{2})(?=[/\-_]|$)", re.IGNORECASE)
_PATH3_RE = re.compile(r"[/_]([a-z]{3})(?=[/_]|$)", re.IGNORECASE)


def select_hreflang(tags: list[str]) -> str | None:
    """First tag that is neither English nor x-default, else the first tag."""
    for tag in tags:
        lowered = tag.lower()
        if not lowered.startswith("en") and lowered != "x-default":
            return tag
    return tags[0] if tags else None


def first_heading(html: str) -> str | None:
    """Text of the first <h1> with at least 3 visible characters.

    Logo headings (``<h1><a><img></a></h1>``) strip down to nothing and are
    skipped.
    """
    for pattern in H1.patterns:
        for m in pattern.finditer(html):
            text = clean_optional(strip_tags(m.group(1)))
            if text and len(text) >= 3:
                return text
    return None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value.strip() or None
    return None


class SignalExtractor:
    def __init__(
        self,
        tld_languages: Mapping[str, str] = TLD_LANGUAGES,
        iso3_to_iso2: Mapping[str, str] = ISO3_TO_ISO2,
        path_codes: frozenset[str] = PATH_CODES,
        subdomain_codes: frozenset[str] = SUBDOMAIN_CODES,
    ):
        self.tld_languages = tld_languages
        self.iso3_to_iso2 = iso3_to_iso2
        self.path_codes = path_codes
        self.subdomain_codes = subdomain_codes

    def extract(self, html: str, headers: Mapping[str, str], url: str) -> ExtractedPage:
        """Extract every signal from one fetched page.

        url must be the caller-supplied URL, not the post-redirect one.
        """
        hreflang_tags = _HREFLANG_RE.findall(html)
        path_code, path_code3 = self.url_path_codes(url)
        tld = self.tld(url)

        signals = LanguageSignals(
            html_lang=HTML_LANG.first(html),
            og_locale=OG_LOCALE.first(html),
            header_lang=_header(headers, "content-language"),
            hreflang=select_hreflang(hreflang_tags),
            hreflang_tags=hreflang_tags,
            url_path_code=path_code,
            url_path_code3=path_code3,
            subdomain_lang=self.subdomain_code(url),
            tld=tld,
            tld_lang=self.tld_languages.get(tld) if tld else None,
        )

        return ExtractedPage(
            signals=signals,
            title=clean_optional(TITLE.first(html)),
            og_title=clean_optional(OG_TITLE.first(html)),
            meta_description=clean_optional(META_DESCRIPTION.first(html)),
            og_description=clean_optional(OG_DESCRIPTION.first(html)),
            site_name=clean_optional(OG_SITE_NAME.first(html)),
            h1=first_heading(html),
        )

    def url_path_codes(self, url: str) -> tuple[str | None, str | None]:
        """(2-letter code, raw 3-letter code) from the URL path.

        A 2-letter segment wins. Otherwise the first 3-letter segment with a
        known ISO 639-2 mapping is used; unmapped 3-letter codes are ignored.
        """
        path = _split(url).path
        for m in _PATH2_RE.finditer(path):
            code = m.group(1).lower()
            if code in self.path_codes:
                return code, None
        for m in _PATH3_RE.finditer(path):
            code3 = m.group(1).lower()
            if code3 in self.iso3_to_iso2:
                return self.iso3_to_iso2[code3], code3
        return None, None

    def subdomain_code(self, url: str) -> str | None:
        labels = _host_labels(url)
        if len(labels) >= 3 and labels[0] in self.subdomain_codes:
            return labels[0]
        return None

    def tld(self, url: str) -> str | None:
        labels = _host_labels(url)
        if len(labels) >= 2 and len(labels[-1]) == 2 and labels[-1].isalpha():
            return labels[-1]
        return None


def _split(url: str):
    if "://" not in url:
        url = "//" + url
    return urlsplit(url)


def _host_labels(url: str) -> list[str]:
    try:
        host = _split(url).hostname or ""
    except ValueError:
        return []
    return [label for label in host.split(".") if label]
