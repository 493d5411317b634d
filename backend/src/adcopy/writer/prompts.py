"""Prompt builders for Responsive Search Ad copy.

The resolved page language and scraped metadata are the context that steers
the model; everything else here is the RSA format contract.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel

from adcopy.config import settings
from adcopy.models import PageSignals, RefineRequest

HEADLINE_LIMIT = 30
DESCRIPTION_LIMIT = 90
# Descriptions of 91-93 chars are tolerated; above that they get trimmed
DESCRIPTION_GRACE = 3
PATH_LIMIT = 15
NUM_HEADLINES = 15
NUM_DESCRIPTIONS = 4


class CopyBrief(BaseModel):
    """Optional steering for one generation."""
    keywords: list[str] = []
    keyword_headlines: int = 5
    keyword_descriptions: int = 0
    season: str | None = None
    season_intensity: Literal["Subtle", "Moderate", "Strong"] = "Moderate"
    discount: str | None = None  # e.g. "20% off"
    discount_placement: Literal["Both", "Headlines only", "Descriptions only"] = "Both"
    brand_tone: str = "Professional"
    brand_required: str | None = None
    brand_banned: str | None = None


def metadata_context(page: PageSignals) -> str:
    lines = [
        page.title and f"Page title: {page.title}",
        page.site_name and f"Brand/site name: {page.site_name}",
        page.meta_description and f"Meta description: {page.meta_description}",
        page.h1 and f"Main page headline (H1): {page.h1}",
    ]
    return "\n".join(line for line in lines if line)


def _keyword_block(brief: CopyBrief) -> str:
    keywords = [k.strip() for k in brief.keywords if k.strip()]
    if not keywords:
        return ""
    n = brief.keyword_headlines
    block = (
        "\nKEYWORDS TO INCLUDE:\n"
        f"Keywords pool: {', '.join(keywords)}\n"
        f"- Distribute these keywords naturally across exactly {n} of the {NUM_HEADLINES} headlines\n"
        f"- Treat the keywords as a pool: spread them across those {n} headlines, "
        "some keywords may appear more than once if needed to fill the target\n"
        f"- A keyword may be the entire headline if it fits within {HEADLINE_LIMIT} chars, "
        "or combined naturally with other words\n"
        f"- Do NOT force a keyword if it would cause the headline to exceed {HEADLINE_LIMIT} characters, "
        "rephrase or use a shorter form"
    )
    if brief.keyword_descriptions:
        block += (
            f"\n- Also include keywords naturally in {brief.keyword_descriptions} "
            f"of the {NUM_DESCRIPTIONS} descriptions"
        )
    return block + "\n- Keywords must appear in the OUTPUT LANGUAGE, translate or adapt them if needed"


def _modifier_blocks(brief: CopyBrief) -> list[str]:
    blocks = []
    if brief.season and brief.season.strip():
        blocks.append(
            f"\nSEASONAL MODIFIER ({brief.season_intensity} intensity):\n"
            f'- Weave "{brief.season.strip()}" seasonal messaging into the ad copy\n'
            "- Subtle: 1-2 headlines reference the season; Moderate: 3-4 headlines + 1 description; "
            "Strong: 5+ headlines + all descriptions carry seasonal theme\n"
            "- Keep seasonal language natural, do not force it where it doesn't fit"
        )
    if brief.discount and brief.discount.strip():
        placement = {
            "Both": "Include in both headlines and descriptions",
            "Headlines only": "Include in headlines only",
            "Descriptions only": "Include in descriptions only",
        }[brief.discount_placement]
        blocks.append(
            "\nDISCOUNT/OFFER MODIFIER:\n"
            f'- Feature this offer prominently: "{brief.discount.strip()}"\n'
            f"- Placement: {placement}\n"
            "- Lead with the offer where possible, it should be one of the first things users see"
        )
    required = (brief.brand_required or "").strip()
    banned = (brief.brand_banned or "").strip()
    if required or banned:
        block = f"\nBRAND & COMPLIANCE MODIFIER:\n- Tone: {brief.brand_tone}"
        if required:
            block += f"\n- REQUIRED words/phrases (must appear somewhere in the output): {required}"
        if banned:
            block += f"\n- BANNED words/phrases (must NOT appear anywhere in the output): {banned}"
        blocks.append(block)
    if len(blocks) >= 2:
        blocks.append(
            f"\nNOTE: {len(blocks)} modifiers are active simultaneously. Balance them carefully, "
            "do not let any single modifier dominate the output at the expense of core product messaging."
        )
    return blocks


def build_generation_prompt(
    url: str,
    page: PageSignals,
    brief: CopyBrief | None = None,
    today: date | None = None,
) -> str:
    brief = brief or CopyBrief()
    year = (today or date.today()).year
    context = metadata_context(page) or "No metadata available, infer from the URL structure."
    extras = _keyword_block(brief) + "".join(_modifier_blocks(brief))

    return f"""You are a Google Ads expert. Generate RSA ad copy for this landing page.
CURRENT YEAR: {year}. Always use this year for any seasonal or time-based references, never reference past years.

URL: {url}

PAGE METADATA (use this as your primary source of truth for the product, brand and USPs):
{context}

OUTPUT LANGUAGE: {page.language}
CRITICAL: You MUST write ALL headlines and descriptions in {page.language}.
Do not mix languages. Do not use English if the language is not English.

Return ONLY valid JSON, no prose, no markdown fences:
{{
  "campaign": "short campaign name",
  "adGroup": "short ad group name",
  "headlines": ["h1","h2","h3","h4","h5","h6","h7","h8","h9","h10","h11","h12","h13","h14","h15"],
  "descriptions": ["d1","d2","d3","d4"],
  "path1": "short-path",
  "path2": "sub-path"
}}
{extras}

STRICT rules:
- Exactly {NUM_HEADLINES} headlines, each ≤ {HEADLINE_LIMIT} characters (hard limit)
- Exactly {NUM_DESCRIPTIONS} descriptions, each ≤ {DESCRIPTION_LIMIT} characters (hard limit)
- path1 and path2: ≤ {PATH_LIMIT} chars, no spaces, URL-safe
- Base ALL copy on the page metadata above, do not invent features not mentioned
- Vary headline types: brand, benefits, CTAs, features, social proof, urgency
- Descriptions: aim for 82-{DESCRIPTION_LIMIT} characters, complete sentences, never cut mid-word
- If a description fits in {DESCRIPTION_LIMIT + 1}-{DESCRIPTION_LIMIT + DESCRIPTION_GRACE} chars with the final word included, include it
- If it would exceed {DESCRIPTION_LIMIT + DESCRIPTION_GRACE} chars, rephrase to fit within {DESCRIPTION_LIMIT} chars cleanly"""


def build_refine_prompt(req: RefineRequest) -> str:
    kind = "description" if req.is_desc else "headline"
    return f"""You are refining a single Google Ads {kind}.

Current text: "{req.current}"
Refinement instruction: "{req.instruction}"
Character limit: {req.limit} characters (hard limit, NEVER exceed this)
Language: {req.language or "English"}. Output MUST be in this language
Page context: {req.url or "not provided"}

Return ONLY the refined text: no quotes, no explanation, no punctuation outside the text itself.
The refined text must be {req.limit} characters or fewer. Count carefully."""


def messages_request(prompt: str, max_tokens: int, model: str | None = None) -> dict[str, Any]:
    return {
        "model": model or settings.anthropic_model,
        "max_tokens": max_tokens,
        "messages": [{"role": "user", "content": prompt}],
    }
