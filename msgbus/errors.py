"""Exceptions raised by the message bus."""


class MsgBusError(Exception):
    """Base class for msgbus errors."""


class InvalidFilterOptions(MsgBusError, ValueError):
    """Filter options of an unsupported shape or with invalid values."""
