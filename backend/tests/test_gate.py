from adcopy.models import Allowed, Denied, Unavailable


async def test_first_use_is_allowed_with_zero_count(gate):
    decision = await gate.check_and_reserve("1.2.3.4")
    assert decision == Allowed(count=0, first_use=True)


async def test_check_does_not_count(gate, store):
    for _ in range(5):
        await gate.check_and_reserve("1.2.3.4")
    assert "rsa:ip:1.2.3.4" not in store.data


async def test_eleventh_attempt_is_denied_at_limit(gate):
    for _ in range(10):
        decision = await gate.check_and_reserve("1.2.3.4")
        assert isinstance(decision, Allowed)
        await gate.record_success("1.2.3.4", decision)

    decision = await gate.check_and_reserve("1.2.3.4")
    assert decision == Denied(count=10, limit=10)


async def test_clients_are_counted_separately(gate):
    decision = await gate.check_and_reserve("1.1.1.1")
    await gate.record_success("1.1.1.1", decision)
    assert await gate.usage("1.1.1.1") == 1
    assert await gate.usage("2.2.2.2") == 0


async def test_window_is_anchored_at_first_use(gate, store, one_day):
    """Later increments never refresh the TTL."""
    key = "rsa:ip:1.2.3.4"
    for day in (0, 3, 9, 20, 29):
        store.now = day * one_day
        decision = await gate.check_and_reserve("1.2.3.4")
        await gate.record_success("1.2.3.4", decision)
        assert store.expires_at[key] == 30 * one_day

    assert store.data[key] == "5"
    assert store.ops().count("EXPIRE") == 0


async def test_counter_resets_after_window(gate, store, one_day):
    for _ in range(10):
        await gate.record_success("1.2.3.4", await gate.check_and_reserve("1.2.3.4"))
    assert isinstance(await gate.check_and_reserve("1.2.3.4"), Denied)

    store.now = 30 * one_day
    decision = await gate.check_and_reserve("1.2.3.4")
    assert decision == Allowed(count=0, first_use=True)


async def test_first_use_sets_expiry_and_later_uses_increment(gate, store):
    await gate.record_success("1.2.3.4", await gate.check_and_reserve("1.2.3.4"))
    await gate.record_success("1.2.3.4", await gate.check_and_reserve("1.2.3.4"))
    assert store.calls[1][0] == "SET"
    assert "NX" in store.calls[1]
    assert store.calls[3] == ("INCR", "rsa:ip:1.2.3.4")


async def test_concurrent_first_use_falls_back_to_increment(gate, store, one_day):
    first = await gate.check_and_reserve("1.2.3.4")
    second = await gate.check_and_reserve("1.2.3.4")
    assert await gate.record_success("1.2.3.4", first) == 1
    assert await gate.record_success("1.2.3.4", second) == 2
    assert store.expires_at["rsa:ip:1.2.3.4"] == 30 * one_day


async def test_record_expiring_between_read_and_increment_gets_a_window(gate, store, one_day):
    store.now = 0
    await gate.record_success("1.2.3.4", await gate.check_and_reserve("1.2.3.4"))
    decision = await gate.check_and_reserve("1.2.3.4")

    store.now = 30 * one_day  # expires before the INCR lands
    assert await gate.record_success("1.2.3.4", decision) == 1
    assert store.expires_at["rsa:ip:1.2.3.4"] == 60 * one_day


async def test_store_down_is_unavailable(gate, store):
    store.down = True
    decision = await gate.check_and_reserve("1.2.3.4")
    assert isinstance(decision, Unavailable)
    assert decision.reason == "transport"
    assert await gate.record_success("1.2.3.4", decision) is None


async def test_unconfigured_store_is_unavailable():
    from adcopy.gate import RateGate
    from adcopy.store import CounterStore

    gate = RateGate(CounterStore(url="", token=""))
    decision = await gate.check_and_reserve("1.2.3.4")
    assert decision == Unavailable(reason="unconfigured")


async def test_garbage_record_is_unavailable(gate, store):
    store.data["rsa:ip:1.2.3.4"] = "not-a-number"
    assert isinstance(await gate.check_and_reserve("1.2.3.4"), Unavailable)


async def test_unavailable_decision_still_records_when_store_recovers(gate, store, one_day):
    await gate.record_success("1.2.3.4", Allowed(count=0, first_use=True))
    count = await gate.record_success("1.2.3.4", Unavailable(reason="transport"))
    assert count == 2
    assert store.expires_at["rsa:ip:1.2.3.4"] == 30 * one_day
