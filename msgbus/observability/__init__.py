"""Observability: logging and metrics for the message bus."""

from msgbus.observability.logger import get_logger
from msgbus.observability.metrics import Metrics

__all__ = ["get_logger", "Metrics"]
