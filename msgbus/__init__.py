"""In-process publish/subscribe router with topic and content filtering."""

from msgbus.errors import InvalidFilterOptions, MsgBusError
from msgbus.filtering import FilterConfig, FilterOptions, build_filter_config
from msgbus.publisher import Emitter, Publisher, Unsubscribe
from msgbus.subscription import ConsumeFunction, Subscription
from msgbus.topic import ExactMatch, PatternMatch, Topic, TopicPattern, build_matcher

__all__ = [
    "ConsumeFunction",
    "Emitter",
    "ExactMatch",
    "FilterConfig",
    "FilterOptions",
    "InvalidFilterOptions",
    "MsgBusError",
    "PatternMatch",
    "Publisher",
    "Subscription",
    "Topic",
    "TopicPattern",
    "Unsubscribe",
    "build_filter_config",
    "build_matcher",
]
