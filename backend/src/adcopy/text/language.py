"""Language arbitration over the extracted page signals.

Precedence, first match wins:

1. ``<html lang>`` when it is not English.
2. Otherwise: URL path code, subdomain, og:locale, Content-Language header,
   hreflang, TLD, ``<html lang>`` (English), then "en".

A genuinely English site without other signals walks the whole chain before
landing on English again.
"""

from __future__ import annotations

from collections.abc import Mapping

from adcopy.models import LanguageSignal, LanguageSignals, Resolution
from adcopy.text.tables import LANGUAGE_NAMES

DEFAULT_CODE = "en"
DEFAULT_LANGUAGE = "English"

# Fallback chain used when <html lang> is missing or English
_FALLBACK_ORDER = (
    "url_path_code",
    "subdomain_lang",
    "og_locale",
    "header_lang",
    "hreflang",
    "tld_lang",
    "html_lang",
)


def is_english(code: str) -> bool:
    return code.lower().startswith("en")


def to_language_name(code: str | None, names: Mapping[str, str] = LANGUAGE_NAMES) -> str | None:
    """Map 'de', 'de-AT', 'pt_BR' or 'da, en' to a display name; None if unknown."""
    if not code:
        return None
    key = code.lower().split(",")[0].strip().replace("_", "-")
    return names.get(key) or names.get(key.split("-")[0])


class LanguageResolver:
    def __init__(self, names: Mapping[str, str] = LANGUAGE_NAMES):
        self.names = names

    def candidates(self, signals: LanguageSignals) -> list[LanguageSignal]:
        """Present signals in the order they are considered."""
        ordered: list[LanguageSignal] = []
        if signals.html_lang and not is_english(signals.html_lang):
            ordered.append(LanguageSignal(source="html_lang", code=signals.html_lang))
        for field in _FALLBACK_ORDER:
            value = getattr(signals, field)
            if value:
                ordered.append(LanguageSignal(source=field, code=value))
        ordered.append(LanguageSignal(source="default", code=DEFAULT_CODE))
        return ordered

    def resolve(self, signals: LanguageSignals) -> Resolution:
        winner = self.candidates(signals)[0]
        language = to_language_name(winner.code, self.names) or DEFAULT_LANGUAGE
        return Resolution(language=language, detected_code=winner.code)
