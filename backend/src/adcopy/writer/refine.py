"""Single-field refinement ("make it punchier", "mention free shipping").

Not usage gated. The character limit is applied to the reply as well as
stated in the prompt.
"""

from __future__ import annotations

from adcopy.models import RefineRequest
from adcopy.writer.client import MessagesClient, first_text_block
from adcopy.writer.prompts import build_refine_prompt, messages_request

_MAX_TOKENS = 200


async def refine_text(req: RefineRequest, client: MessagesClient | None = None) -> str:
    client = client or MessagesClient()
    payload = await client.create(messages_request(build_refine_prompt(req), _MAX_TOKENS))
    refined = (first_text_block(payload) or "").strip() or req.current
    return refined[: req.limit]
