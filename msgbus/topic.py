"""Topic types and the matchers subscriptions use to test incoming topics."""

import re
from dataclasses import dataclass
from typing import Optional, Union

from msgbus.errors import InvalidFilterOptions

Topic = Union[str, int]
TopicPattern = Union[str, int, "re.Pattern[str]"]


def is_topic(value: object) -> bool:
    """True for str or int values (bool is excluded even though it subclasses int)."""
    return isinstance(value, (str, int)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ExactMatch:
    """Accepts a topic equal to the configured value ("1" and 1 are different topics)."""

    value: Topic

    def accepts(self, topic: Topic) -> bool:
        if isinstance(self.value, str) != isinstance(topic, str):
            return False
        return topic == self.value


@dataclass(frozen=True)
class PatternMatch:
    """Accepts a topic whose string form contains a match of the pattern."""

    pattern: "re.Pattern[str]"

    def accepts(self, topic: Topic) -> bool:
        return self.pattern.search(str(topic)) is not None


TopicMatcher = Union[ExactMatch, PatternMatch]


def build_matcher(pattern: Optional[TopicPattern]) -> Optional[TopicMatcher]:
    """Pick the matcher for a topic pattern once; None means no topic filtering."""
    if pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return PatternMatch(pattern)
    if is_topic(pattern):
        return ExactMatch(pattern)
    raise InvalidFilterOptions(
        f"topic pattern must be str, int or re.Pattern, got {type(pattern).__name__}"
    )
