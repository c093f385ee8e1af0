"""Filter configuration for subscriptions and normalization of the accepted option shapes.

``subscribe`` takes its filter options in one of several forms:

- nothing: every message is accepted;
- a bare topic (``"orders"``, ``42``) or a compiled ``re.Pattern``: shorthand for
  ``{"topic_pattern": value, "strict_topic_filtering": True}``;
- a ``dict`` or a ``FilterOptions`` with any of ``topic_pattern``,
  ``strict_topic_filtering`` and ``content_filter``;
- an already resolved ``FilterConfig``.

``build_filter_config`` turns any of them into a ``FilterConfig``.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from msgbus.errors import InvalidFilterOptions
from msgbus.topic import TopicPattern, is_topic

ContentFilter = Callable[[Any], bool]


@dataclass(frozen=True)
class FilterConfig:
    """Resolved matching rule of one subscription."""

    topic_pattern: Optional[TopicPattern] = None
    strict_topic_filtering: bool = False
    content_filter: Optional[ContentFilter] = None


class FilterOptions(BaseModel):
    """Object form of filter options, as passed by callers."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", frozen=True)

    topic_pattern: Any = None
    strict_topic_filtering: Optional[bool] = None
    content_filter: Optional[Callable[[Any], bool]] = None

    @field_validator("topic_pattern")
    @classmethod
    def _check_topic_pattern(cls, value: Any) -> Any:
        if value is None or isinstance(value, re.Pattern) or is_topic(value):
            return value
        raise ValueError("topic_pattern must be str, int or re.Pattern")

    def to_config(self) -> FilterConfig:
        """Resolve defaults: strictness only means something when a pattern was given."""
        supplied = self.model_fields_set
        if "topic_pattern" in supplied and self.topic_pattern is not None:
            strict = True if self.strict_topic_filtering is None else self.strict_topic_filtering
            return FilterConfig(
                topic_pattern=self.topic_pattern,
                strict_topic_filtering=strict,
                content_filter=self.content_filter,
            )
        return FilterConfig(content_filter=self.content_filter)


FilterInput = Union[None, TopicPattern, Dict[str, Any], FilterOptions, FilterConfig]


def build_filter_config(options: FilterInput = None) -> FilterConfig:
    """Normalize any accepted option shape into a FilterConfig."""
    if options is None:
        return FilterConfig()
    if isinstance(options, FilterConfig):
        return options
    if isinstance(options, re.Pattern) or is_topic(options):
        return FilterConfig(topic_pattern=options, strict_topic_filtering=True)
    if isinstance(options, FilterOptions):
        return options.to_config()
    if isinstance(options, dict):
        try:
            return FilterOptions.model_validate(options).to_config()
        except ValidationError as e:
            raise InvalidFilterOptions(f"invalid filter options: {e}") from e
    raise InvalidFilterOptions(
        f"unsupported filter options of type {type(options).__name__}"
    )
