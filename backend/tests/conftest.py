from __future__ import annotations

from typing import Any

import pytest

from adcopy.errors import GenerationError
from adcopy.gate import RateGate
from adcopy.models import StoreUnavailable
from adcopy.store import CounterStore

DAY = 24 * 60 * 60


class FakeStore(CounterStore):
    """In-memory Redis with GET/SET [EX] [NX]/INCR/EXPIRE semantics and a manual clock."""

    def __init__(self):
        super().__init__(url="https://store.test", token="test-token")
        self.data: dict[str, str] = {}
        self.expires_at: dict[str, float] = {}
        self.now = 0.0
        self.down = False
        self.calls: list[tuple] = []

    def _evict(self, key: str) -> None:
        exp = self.expires_at.get(key)
        if exp is not None and self.now >= exp:
            self.data.pop(key, None)
            self.expires_at.pop(key, None)

    async def command(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.down:
            return StoreUnavailable(reason="transport", detail="connection refused")

        op, key, *rest = args
        self._evict(key)
        if op == "GET":
            return self.data.get(key)
        if op == "SET":
            value, opts = rest[0], [str(o).upper() for o in rest[1:]]
            if "NX" in opts and key in self.data:
                return None
            self.data[key] = str(value)
            self.expires_at.pop(key, None)
            if "EX" in opts:
                self.expires_at[key] = self.now + int(opts[opts.index("EX") + 1])
            return "OK"
        if op == "INCR":
            value = int(self.data.get(key, "0")) + 1
            self.data[key] = str(value)
            return value
        if op == "EXPIRE":
            if key not in self.data:
                return 0
            self.expires_at[key] = self.now + int(rest[0])
            return 1
        raise AssertionError(f"unexpected command {args}")

    def ops(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakeMessagesClient:
    """Stands in for MessagesClient; fails with GenerationError when told to."""

    def __init__(self, text: str = "ok", fail_status: int | None = None):
        self.text = text
        self.fail_status = fail_status
        self.requests: list[dict] = []
        self.configured = True

    async def create(self, body: dict) -> dict:
        self.requests.append(body)
        if self.fail_status is not None:
            raise GenerationError(self.fail_status, body={"error": {"type": "overloaded_error"}})
        return {
            "id": "msg_test",
            "content": [{"type": "text", "text": self.text}],
            "usage": {"input_tokens": 10, "output_tokens": 5},
        }


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def gate(store: FakeStore) -> RateGate:
    return RateGate(store, limit=10, window_seconds=30 * DAY, key_prefix="rsa:ip:")


@pytest.fixture
def messages() -> FakeMessagesClient:
    return FakeMessagesClient()


@pytest.fixture
def localized_html() -> str:
    return """<!doctype html>
<html lang="en">
<head>
  <title>Fallback title</title>
  <meta content="Cykler &amp; tilbehør" property="og:title">
  <meta property="og:locale" content="da_DK">
  <meta name="description" content="Køb cykler online med fri fragt i hele Danmark">
  <meta property="og:site_name" content="Cykelbutikken">
  <link rel="alternate" hreflang="x-default" href="https://shop.example.dk/">
  <link rel="alternate" hreflang="en-GB" href="https://shop.example.dk/en/">
  <link rel="alternate" hreflang="da-DK" href="https://shop.example.dk/da/">
</head>
<body><h1>Nye <span>cykler</span> til foråret</h1></body>
</html>"""


@pytest.fixture
def one_day() -> int:
    return DAY


@pytest.fixture
def make_messages() -> type[FakeMessagesClient]:
    """The fake client class, for tests that need more than one or a subclass."""
    return FakeMessagesClient
