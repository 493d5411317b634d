"""Cleanup for text pulled out of raw HTML with regexes."""

import html
import re
import unicodedata

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def normalize_text(text: str) -> str:
    """Normalize scraped text for use in a prompt.

    Steps:
    1. NFC normalization (composed accents, so character counts match what users see)
    2. HTML entity decoding (&amp; → &, &#8217; → ', etc.)
    3. Collapse whitespace
    """
    text = unicodedata.normalize("NFC", text)
    text = html.unescape(text)
    text = _WS_RE.sub(" ", text).strip()
    return text


def clean_optional(text: str | None) -> str | None:
    """normalize_text() for optional values; empty results become None."""
    if text is None:
        return None
    return normalize_text(text) or None
