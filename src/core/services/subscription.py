"""Subscription write path.

`subscribe` validates a candidate, reads the subscriber list, skips
duplicates and appends new addresses. Every call resolves to an `Outcome`;
no exception reaches the caller.

The read and the write are not atomic as a pair: two concurrent calls for
different new addresses can read the same list, and the later write drops
the earlier append (last writer wins).
"""

from __future__ import annotations

import logging

from adapters.kv_store import KvRestListStore
from core.config import StoreConfig
from core.domain.models import (
    ALREADY_SUBSCRIBED_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    MISSING_SETUP_MESSAGE,
    SUBSCRIBED_MESSAGE,
    Outcome,
)
from core.domain.validation import validate_email
from core.interfaces.list_store import ListStore

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Owns the subscriber list; the only component that writes to it.

    `config=None` is degraded mode: every call fails fast without I/O.
    `store` overrides the REST adapter built from `config` (tests, local runs).
    """

    def __init__(self, config: StoreConfig | None, store: ListStore | None = None) -> None:
        self._config = config
        self._store: ListStore | None = None
        if config is not None:
            self._store = store or KvRestListStore(config)

    async def subscribe(self, candidate: str) -> Outcome:
        if self._config is None or self._store is None:
            logger.warning("Store not configured; rejecting subscribe call")
            return Outcome.failure(MISSING_SETUP_MESSAGE)

        validation = validate_email(candidate)
        if not validation.ok or validation.value is None:
            logger.info("Rejected candidate: %s", validation.reason)
            return Outcome.failure(validation.reason or GENERIC_FAILURE_MESSAGE)

        email = validation.value
        key = self._config.key
        try:
            current = await self._store.get(key) or []
            if email in current:
                logger.info("Email already subscribed")
                return Outcome.success(ALREADY_SUBSCRIBED_MESSAGE)

            await self._store.set(key, [*current, email])
        except Exception as exc:
            logger.exception("Subscribe failed against store")
            return Outcome.failure(str(exc).strip() or GENERIC_FAILURE_MESSAGE)

        logger.info("Subscriber appended (%d total)", len(current) + 1)
        return Outcome.success(SUBSCRIBED_MESSAGE)
