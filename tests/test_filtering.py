import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from msgbus.errors import InvalidFilterOptions
from msgbus.filtering import FilterConfig, FilterOptions, build_filter_config


def _is_str(message: object) -> bool:
    return isinstance(message, str)


def test_no_options_accept_everything() -> None:
    config = build_filter_config()
    assert config == FilterConfig(topic_pattern=None, strict_topic_filtering=False, content_filter=None)


@pytest.mark.parametrize("shorthand", ["my-topic", 42, re.compile(r"topic-.*")])
def test_shorthand_is_strict_topic_pattern(shorthand: object) -> None:
    config = build_filter_config(shorthand)
    assert config.topic_pattern is shorthand
    assert config.strict_topic_filtering is True
    assert config.content_filter is None


def test_dict_with_topic_pattern_defaults_to_strict() -> None:
    config = build_filter_config({"topic_pattern": "orders"})
    assert config.topic_pattern == "orders"
    assert config.strict_topic_filtering is True


def test_dict_can_disable_strict_filtering() -> None:
    config = build_filter_config({"topic_pattern": "orders", "strict_topic_filtering": False})
    assert config.strict_topic_filtering is False


def test_dict_with_content_filter_only() -> None:
    config = build_filter_config({"content_filter": _is_str})
    assert config.topic_pattern is None
    assert config.strict_topic_filtering is False
    assert config.content_filter is _is_str


def test_strictness_without_pattern_is_dropped() -> None:
    config = build_filter_config({"strict_topic_filtering": True})
    assert config == FilterConfig()


def test_all_properties() -> None:
    pattern = re.compile(r"^test-\d+$")
    config = build_filter_config(
        FilterOptions(topic_pattern=pattern, strict_topic_filtering=False, content_filter=_is_str)
    )
    assert config.topic_pattern is pattern
    assert config.strict_topic_filtering is False
    assert config.content_filter is _is_str


def test_resolved_config_passes_through() -> None:
    config = FilterConfig(topic_pattern="t", strict_topic_filtering=False)
    assert build_filter_config(config) is config


@pytest.mark.parametrize(
    "options",
    [
        True,
        3.5,
        ["topic"],
        {"topicPattern": "camel"},
        {"topic_pattern": ["a", "b"]},
        {"content_filter": "not callable"},
    ],
)
def test_invalid_options_rejected(options: object) -> None:
    with pytest.raises(InvalidFilterOptions):
        build_filter_config(options)
