"""Turn the model's text reply into an AdCopy, enforcing RSA limits.

Models sometimes wrap the JSON in fences, leave trailing commas or use curly
quotes. Those are repaired first; if the JSON still does not parse, fields are
pulled out one by one with regexes.
"""

from __future__ import annotations

import json
import re

from adcopy.models import AdCopy
from adcopy.writer.prompts import (
    DESCRIPTION_GRACE,
    DESCRIPTION_LIMIT,
    HEADLINE_LIMIT,
    NUM_DESCRIPTIONS,
    NUM_HEADLINES,
    PATH_LIMIT,
)

_FENCE_RE = re.compile(r"```json|```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")
_QUOTED_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')


class AdCopyParseError(ValueError):
    pass


def smart_trim_description(text: str) -> str:
    """Keep up to limit + grace chars; beyond that cut at the last word boundary."""
    if len(text) <= DESCRIPTION_LIMIT + DESCRIPTION_GRACE:
        return text
    cut = text[:DESCRIPTION_LIMIT]
    last_space = cut.rfind(" ")
    return cut[:last_space] if last_space > 0 else cut


def _sanitise(raw: str) -> str:
    raw = _TRAILING_COMMA_RE.sub(r"\1", raw)
    raw = raw.replace("‘", "'").replace("’", "'")
    return raw.replace("“", '"').replace("”", '"')


def _extract_array(text: str, key: str) -> list[str]:
    m = re.search(rf'"{key}"\s*:\s*\[([\s\S]*?)\]', text)
    if not m:
        return []
    return _QUOTED_RE.findall(m.group(1))


def _extract_str(text: str, key: str) -> str:
    m = re.search(rf'"{key}"\s*:\s*"([^"]*)"', text)
    return m.group(1) if m else ""


def _pad(items: list, n: int) -> list[str]:
    items = [str(x) if x else "" for x in items[:n]]
    return items + [""] * (n - len(items))


def parse_ad_copy(text: str) -> AdCopy:
    stripped = _FENCE_RE.sub("", text).strip()
    m = _OBJECT_RE.search(stripped)
    if not m:
        raise AdCopyParseError("Invalid response format")
    raw = _sanitise(m.group(0))

    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise AdCopyParseError("Invalid response format")
    except json.JSONDecodeError:
        data = {
            "campaign": _extract_str(raw, "campaign"),
            "adGroup": _extract_str(raw, "adGroup"),
            "headlines": _extract_array(raw, "headlines"),
            "descriptions": _extract_array(raw, "descriptions"),
            "path1": _extract_str(raw, "path1"),
            "path2": _extract_str(raw, "path2"),
        }
        if not data["headlines"]:
            raise AdCopyParseError("Could not parse response, please try again")

    for field in ("headlines", "descriptions"):
        if not isinstance(data.get(field) or [], list):
            raise AdCopyParseError(f"Invalid response format: {field} is not a list")

    return AdCopy(
        campaign=str(data.get("campaign") or ""),
        ad_group=str(data.get("adGroup") or ""),
        headlines=[h[:HEADLINE_LIMIT] for h in _pad(data.get("headlines") or [], NUM_HEADLINES)],
        descriptions=[
            smart_trim_description(d) for d in _pad(data.get("descriptions") or [], NUM_DESCRIPTIONS)
        ],
        path1=str(data.get("path1") or "")[:PATH_LIMIT],
        path2=str(data.get("path2") or "")[:PATH_LIMIT],
    )
