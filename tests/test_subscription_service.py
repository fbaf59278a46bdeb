"""
SubscriptionService tests
"""

import asyncio

import pytest

from core.config import StoreConfig
from core.domain.models import (
    ALREADY_SUBSCRIBED_MESSAGE,
    EMAIL_REQUIRED_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    INVALID_EMAIL_MESSAGE,
    MISSING_SETUP_MESSAGE,
    SUBSCRIBED_MESSAGE,
    OutcomeKind,
)
from core.interfaces.list_store import StoreError
from core.services import subscription
from core.services.subscription import SubscriptionService
from doubles import InMemoryListStore

KEY = "emails"


@pytest.fixture
def config():
    return StoreConfig(url="https://kv.example.test", token="secret", key=KEY)


class ExplodingStore:
    """Fails the test if the service touches the store."""

    def __init__(self):
        self.calls = 0

    async def get(self, key):
        self.calls += 1
        raise AssertionError("store must not be read")

    async def set(self, key, values):
        self.calls += 1
        raise AssertionError("store must not be written")


class FailingStore:
    def __init__(self, exc, *, fail_on="get", initial=None):
        self.exc = exc
        self.fail_on = fail_on
        self.initial = initial
        self.writes = 0

    async def get(self, key):
        if self.fail_on == "get":
            raise self.exc
        return self.initial

    async def set(self, key, values):
        self.writes += 1
        if self.fail_on == "set":
            raise self.exc


class TestDegradedMode:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("candidate", ["a@x.com", "not-an-email", ""])
    async def test_missing_config_fails_without_io(self, candidate):
        store = ExplodingStore()
        service = SubscriptionService(None, store=store)

        outcome = await service.subscribe(candidate)

        assert outcome.kind is OutcomeKind.FAILURE
        assert outcome.message == MISSING_SETUP_MESSAGE
        assert store.calls == 0


class TestValidation:

    @pytest.mark.asyncio
    async def test_invalid_email_never_touches_store(self, config):
        store = ExplodingStore()
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("not-an-email")

        assert outcome.ok is False
        assert outcome.message == INVALID_EMAIL_MESSAGE
        assert store.calls == 0

    @pytest.mark.asyncio
    async def test_empty_email_is_required(self, config):
        store = ExplodingStore()
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("  ")

        assert outcome.message == EMAIL_REQUIRED_MESSAGE
        assert store.calls == 0


class TestWritePath:

    @pytest.mark.asyncio
    async def test_duplicate_is_success_without_write(self, config):
        store = InMemoryListStore({KEY: ["a@x.com"]})
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("a@x.com")

        assert outcome.ok is True
        assert outcome.message == ALREADY_SUBSCRIBED_MESSAGE
        assert store.reads == 1
        assert store.writes == 0
        assert store.data[KEY] == ["a@x.com"]

    @pytest.mark.asyncio
    async def test_new_email_is_appended_last(self, config):
        store = InMemoryListStore({KEY: ["a@x.com"]})
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("b@x.com")

        assert outcome.ok is True
        assert outcome.message == SUBSCRIBED_MESSAGE
        assert store.data[KEY] == ["a@x.com", "b@x.com"]
        assert store.reads == 1
        assert store.writes == 1

    @pytest.mark.asyncio
    async def test_absent_key_creates_list(self, config):
        store = InMemoryListStore()
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("a@x.com")

        assert outcome.message == SUBSCRIBED_MESSAGE
        assert store.data[KEY] == ["a@x.com"]

    @pytest.mark.asyncio
    async def test_repeat_subscribe_keeps_single_copy(self, config):
        store = InMemoryListStore()
        service = SubscriptionService(config, store=store)

        first = await service.subscribe("a@x.com")
        second = await service.subscribe("a@x.com")

        assert first.message == SUBSCRIBED_MESSAGE
        assert second.message == ALREADY_SUBSCRIBED_MESSAGE
        assert store.data[KEY] == ["a@x.com"]
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_case_variants_are_distinct_subscribers(self, config):
        store = InMemoryListStore({KEY: ["a@x.com"]})
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("A@x.com")

        assert outcome.message == SUBSCRIBED_MESSAGE
        assert store.data[KEY] == ["a@x.com", "A@x.com"]

    @pytest.mark.asyncio
    async def test_uses_configured_key(self):
        store = InMemoryListStore()
        service = SubscriptionService(
            StoreConfig(url="https://kv.example.test", token="t", key="newsletter"),
            store=store,
        )

        await service.subscribe("a@x.com")

        assert store.data == {"newsletter": ["a@x.com"]}

    @pytest.mark.asyncio
    async def test_concurrent_writers_last_write_wins(self, config):
        # Both calls read before either writes.
        store = InMemoryListStore()
        both_read = asyncio.Event()
        original_get = store.get

        async def slow_get(key):
            values = await original_get(key)
            if store.reads >= 2:
                both_read.set()
            await both_read.wait()
            return values

        store.get = slow_get
        service = SubscriptionService(config, store=store)

        first, second = await asyncio.gather(
            service.subscribe("a@x.com"),
            service.subscribe("b@x.com"),
        )

        assert first.ok and second.ok
        assert store.writes == 2
        assert len(store.data[KEY]) == 1


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_read_error_becomes_failure(self, config):
        service = SubscriptionService(config, store=FailingStore(StoreError("connection refused")))

        outcome = await service.subscribe("a@x.com")

        assert outcome.kind is OutcomeKind.FAILURE
        assert outcome.message == "connection refused"

    @pytest.mark.asyncio
    async def test_write_error_becomes_failure(self, config):
        store = FailingStore(StoreError("READONLY"), fail_on="set", initial=["a@x.com"])
        service = SubscriptionService(config, store=store)

        outcome = await service.subscribe("b@x.com")

        assert outcome.ok is False
        assert outcome.message == "READONLY"
        assert store.writes == 1

    @pytest.mark.asyncio
    async def test_error_without_message_uses_fallback(self, config):
        service = SubscriptionService(config, store=FailingStore(RuntimeError()))

        outcome = await service.subscribe("a@x.com")

        assert outcome.ok is False
        assert outcome.message == GENERIC_FAILURE_MESSAGE


class TestOutcome:

    @pytest.mark.asyncio
    async def test_every_call_gets_fresh_id(self, config):
        service = SubscriptionService(config, store=InMemoryListStore())

        ids = {(await service.subscribe("bad")).id for _ in range(5)}

        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_builds_rest_store_from_config(self, config, monkeypatch):
        built = []

        def fake_rest_store(store_config):
            store = InMemoryListStore()
            built.append((store_config, store))
            return store

        monkeypatch.setattr(subscription, "KvRestListStore", fake_rest_store)
        service = SubscriptionService(config)

        outcome = await service.subscribe("a@x.com")

        assert outcome.message == SUBSCRIBED_MESSAGE
        [(store_config, store)] = built
        assert store_config is config
        assert store.data == {KEY: ["a@x.com"]}
