"""Publisher: registers subscriptions and fans emitted messages out to them."""

import asyncio
import inspect
import itertools
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from msgbus.config import load_settings
from msgbus.filtering import FilterInput, build_filter_config
from msgbus.observability import Metrics, get_logger
from msgbus.observability.metrics import (
    DELIVERIES,
    DELIVERY_FAILURES,
    MESSAGES_EMITTED,
    SUBSCRIPTIONS,
)
from msgbus.subscription import ConsumeFunction, Subscription
from msgbus.topic import Topic

Unsubscribe = Callable[[], bool]
Emitter = Callable[..., Optional[Awaitable[None]]]

logger = get_logger("msgbus.publisher")


class Publisher:
    """In-memory message router owning an ordered arena of live subscriptions.

    Subscriptions are keyed by an integer taken from a per-publisher counter, so
    identical subscribe() calls always produce independent entries. Consumers
    may be plain functions or return awaitables; see emit() for how the two are
    joined.
    """

    def __init__(self, name: Optional[str] = None, isolate_errors: Optional[bool] = None) -> None:
        self._name = name or f"pub_{uuid.uuid4().hex[:8]}"
        if isolate_errors is None:
            isolate_errors = load_settings().isolate_errors
        self._isolate_errors = isolate_errors
        self._subscriptions: Dict[int, Subscription] = {}
        self._keys = itertools.count(1)
        self._metrics = Metrics()

    @classmethod
    def create(cls, name: Optional[str] = None, isolate_errors: Optional[bool] = None) -> "Publisher":
        return cls(name=name, isolate_errors=isolate_errors)

    @property
    def name(self) -> str:
        return self._name

    @property
    def isolate_errors(self) -> bool:
        return self._isolate_errors

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def subscriptions_number(self) -> int:
        """Number of subscriptions not yet revoked."""
        return len(self._subscriptions)

    def get_subscriptions(self) -> List[Subscription]:
        """Return a copy of the live subscriptions in registration order."""
        return list(self._subscriptions.values())

    def subscribe(self, consume: ConsumeFunction, options: FilterInput = None) -> Unsubscribe:
        """
        Register consume with the given filter options.
        Returns a handle revoking exactly this subscription; calling it again is a no-op.
        """
        config = build_filter_config(options)
        key = next(self._keys)
        self._subscriptions[key] = Subscription(key, consume, config)
        self._metrics.set_gauge(SUBSCRIPTIONS, len(self._subscriptions))
        logger.info(
            "subscribed",
            extra={
                "subscription_key": key,
                "topic_pattern": config.topic_pattern,
                "publisher": self._name,
            },
        )

        def unsubscribe() -> bool:
            return self.revoke(key)

        return unsubscribe

    def revoke(self, key: int) -> bool:
        """Remove the subscription with this key. Returns False if it was not live."""
        if self._subscriptions.pop(key, None) is None:
            return False
        self._metrics.set_gauge(SUBSCRIPTIONS, len(self._subscriptions))
        logger.info(
            "unsubscribed",
            extra={"subscription_key": key, "publisher": self._name},
        )
        return True

    def get_emitter(self) -> Emitter:
        """Return a standalone emit function bound to this publisher."""

        def emitter(message: Any, topic: Optional[Topic] = None) -> Optional[Awaitable[None]]:
            return self.emit(message, topic)

        return emitter

    def emit(self, message: Any, topic: Optional[Topic] = None) -> Optional[Awaitable[None]]:
        """
        Deliver message to every matching subscription, in registration order.

        Synchronous consumers have all run when this returns. Returns None when
        no consumer returned an awaitable; otherwise returns an awaitable that
        completes once every one of them has settled. Inside a running event loop
        each awaitable is scheduled as a task as soon as its consumer returns, so
        it runs to completion even if the result is never awaited or a later
        consumer raises; without a loop the result is a coroutine to hand to
        asyncio.run().
        """
        subscriptions = list(self._subscriptions.values())
        self._metrics.increment(MESSAGES_EMITTED)
        logger.debug(
            "emitting",
            extra={
                "topic": topic,
                "subscription_count": len(subscriptions),
                "publisher": self._name,
            },
        )
        try:
            asyncio.get_running_loop()
            in_loop = True
        except RuntimeError:
            in_loop = False
        pending: List[Awaitable[Any]] = []
        for subscription in subscriptions:
            try:
                if not subscription.matches(message, topic):
                    continue
                result = subscription.consume(message)
            except Exception as e:
                self._metrics.increment(DELIVERY_FAILURES)
                if not self._isolate_errors:
                    if not in_loop:
                        _close_unstarted(pending)
                    raise
                logger.exception(
                    "delivery_failed",
                    extra={
                        "subscription_key": subscription.key,
                        "topic": topic,
                        "error": str(e),
                        "publisher": self._name,
                    },
                )
                continue
            if not inspect.isawaitable(result):
                self._metrics.increment(DELIVERIES)
                continue
            pending.append(asyncio.ensure_future(result) if in_loop else result)
        if not pending:
            return None
        if not in_loop:
            return self._wait_all(pending, topic)
        return asyncio.ensure_future(self._wait_all(pending, topic))

    async def _wait_all(self, pending: List[Awaitable[Any]], topic: Optional[Topic]) -> None:
        """Wait for every awaitable to settle; re-raise the first failure unless isolating."""
        results = await asyncio.gather(*pending, return_exceptions=True)
        failures = [r for r in results if isinstance(r, BaseException)]
        self._metrics.increment(DELIVERIES, len(results) - len(failures))
        for failure in failures:
            self._metrics.increment(DELIVERY_FAILURES)
            if self._isolate_errors:
                logger.error(
                    "delivery_failed",
                    exc_info=failure,
                    extra={"topic": topic, "error": str(failure), "publisher": self._name},
                )
        if failures and not self._isolate_errors:
            raise failures[0]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, subscriptions={len(self._subscriptions)})"


def _close_unstarted(pending: List[Awaitable[Any]]) -> None:
    """Close coroutines that will never be awaited because dispatch was aborted."""
    for awaitable in pending:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
