"""Usage-gated access to copy generation.

Sequence per request:

1. Ask the RateGate. Denied → GatedResult, the Messages API is not called.
2. Call the Messages API. A failure propagates as GenerationError and no
   quota is consumed.
3. On success, record the usage and annotate the payload with the new count.

If the store cannot be reached the gate answers Unavailable and the request
proceeds as if allowed (fail open); the increment is still attempted.
"""

from __future__ import annotations

from typing import Any

from adcopy.gate import RateGate
from adcopy.models import Allowed, Denied, GatedResult, GatewayResult, GenerationResult
from adcopy.store import CounterStore
from adcopy.utils.logging import YELLOW, RESET, get_logger
from adcopy.writer.client import MessagesClient

log = get_logger("adcopy.gateway")


def gated_message(limit: int) -> str:
    return f"You've used all {limit} free generations. Create a free account to continue."


class GenerationGateway:
    def __init__(self, gate: RateGate | None = None, client: MessagesClient | None = None):
        self.gate = gate if gate is not None else RateGate(CounterStore())
        self.client = client or MessagesClient()

    async def generate(self, identity: str, request: dict[str, Any]) -> GatewayResult:
        decision = await self.gate.check_and_reserve(identity)

        if isinstance(decision, Denied):
            log.info(f"{YELLOW}Gated{RESET} {identity}: {decision.count}/{decision.limit}")
            return GatedResult(
                count=decision.count,
                limit=decision.limit,
                message=gated_message(decision.limit),
            )

        if not isinstance(decision, Allowed):
            log.warning(f"Gate unavailable ({decision.reason}), failing open for {identity}")

        payload = await self.client.create(request)

        new_count = await self.gate.record_success(identity, decision)
        if new_count is None:
            new_count = (decision.count if isinstance(decision, Allowed) else 0) + 1
        return GenerationResult(payload=payload, usage_count=new_count, usage_limit=self.gate.limit)
