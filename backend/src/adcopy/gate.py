"""Per-client usage gate for the generation endpoint.

A client gets ``free_limit`` successful generations per window. The window
starts at the client's first successful generation and is fixed from then on:
the TTL is written once, when the record is created, and later increments are
bare INCRs that leave it alone.

The gate never counts on its own. check_and_reserve() only reads, and the
caller invokes record_success() after the downstream call succeeded, so failed
generations never consume quota.

Two concurrent Allowed requests from the same client may both proceed and
both count; the quota is advisory, not an admission barrier.
"""

from __future__ import annotations

from adcopy.config import settings
from adcopy.models import Allowed, Denied, QuotaDecision, StoreUnavailable, Unavailable
from adcopy.store import CounterStore
from adcopy.utils.logging import get_logger

log = get_logger("adcopy.gate")


class RateGate:
    def __init__(
        self,
        store: CounterStore,
        limit: int | None = None,
        window_seconds: int | None = None,
        key_prefix: str | None = None,
    ):
        self.store = store
        self.limit = settings.free_limit if limit is None else limit
        self.window_seconds = settings.window_seconds if window_seconds is None else window_seconds
        self.key_prefix = settings.quota_key_prefix if key_prefix is None else key_prefix

    def key(self, identity: str) -> str:
        return f"{self.key_prefix}{identity}"

    async def check_and_reserve(self, identity: str) -> QuotaDecision:
        """Read the client's usage. Denied means: do not call downstream."""
        current = await self.store.get(self.key(identity))
        if isinstance(current, StoreUnavailable):
            return Unavailable(reason=current.reason)
        if current is None:
            return Allowed(count=0, first_use=True)

        try:
            count = int(current)
        except ValueError:
            log.warning(f"Quota record for {identity} is not an integer: {current!r}")
            return Unavailable(reason="error")

        if count >= self.limit:
            return Denied(count=count, limit=self.limit)
        return Allowed(count=count)

    async def record_success(self, identity: str, decision: QuotaDecision) -> int | None:
        """Count one successful generation. Returns the new count, None if unknown.

        Best effort: store failures are logged and swallowed.
        """
        key = self.key(identity)

        if isinstance(decision, Denied):
            raise ValueError("record_success called for a denied request")

        if isinstance(decision, Unavailable) or decision.first_use:
            # NX so a concurrent first use (or a record we could not read)
            # keeps its original expiry; fall through to a bare INCR.
            created = await self.store.set_with_expiry(key, 1, self.window_seconds, only_if_absent=True)
            if isinstance(created, StoreUnavailable):
                log.warning(f"Usage not recorded for {identity}: store {created.reason}")
                return None
            if created:
                return 1

        new_count = await self.store.incr(key)
        if isinstance(new_count, StoreUnavailable):
            log.warning(f"Usage not recorded for {identity}: store {new_count.reason}")
            return None

        if new_count == 1:
            # The record expired between the read and the INCR, so INCR just
            # created it without a TTL. This is its creation: start the window.
            expired = await self.store.expire(key, self.window_seconds)
            if isinstance(expired, StoreUnavailable):
                log.warning(f"Window not started for {identity}: store {expired.reason}")
        return new_count

    async def usage(self, identity: str) -> int | None:
        """Current count for a client, None when the store cannot answer."""
        decision = await self.check_and_reserve(identity)
        if isinstance(decision, Unavailable):
            return None
        return decision.count
