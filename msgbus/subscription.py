"""Subscription: one consumer plus the rule deciding which messages reach it."""

from typing import Any, Awaitable, Callable, Optional, Union

from msgbus.filtering import FilterConfig
from msgbus.topic import Topic, TopicMatcher, build_matcher

ConsumeFunction = Callable[[Any], Union[None, Awaitable[None]]]


class Subscription:
    """Immutable subscription; the topic matcher is built once at construction."""

    __slots__ = ("_key", "_consume", "_config", "_matcher")

    def __init__(self, key: int, consume: ConsumeFunction, config: FilterConfig) -> None:
        self._key = key
        self._consume = consume
        self._config = config
        self._matcher: Optional[TopicMatcher] = build_matcher(config.topic_pattern)

    @property
    def key(self) -> int:
        return self._key

    @property
    def consume(self) -> ConsumeFunction:
        return self._consume

    @property
    def config(self) -> FilterConfig:
        return self._config

    def matches(self, message: Any, topic: Optional[Topic] = None) -> bool:
        """Topic check first; the content filter only runs when the topic passes."""
        if not self._match_topic(topic):
            return False
        content_filter = self._config.content_filter
        return content_filter is None or bool(content_filter(message))

    def _match_topic(self, topic: Optional[Topic]) -> bool:
        if self._matcher is None:
            return True
        if topic is None:
            return not self._config.strict_topic_filtering
        return self._matcher.accepts(topic)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(key={self._key!r}, "
            f"topic_pattern={self._config.topic_pattern!r}, "
            f"strict={self._config.strict_topic_filtering!r})"
        )
