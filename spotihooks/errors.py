"""
🚨 Exception hierarchy for SpotiHooks.

Validation problems are raised before any request is built. Transport
failures are the ``requests`` exceptions themselves, re-exported here as
``TransportFailure`` so callers have a single import point.
"""

from enum import Enum

from requests.exceptions import RequestException

TransportFailure = RequestException


class SpotiHooksError(Exception):
    """Base class for errors raised by SpotiHooks itself."""


class InvalidArgument(SpotiHooksError, ValueError):
    """A caller supplied a value outside the allowed set or range."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        self.message = message
        super().__init__(f"{field_name}: {message}")


class ConfigurationError(SpotiHooksError):
    """Configuration could not be loaded or failed schema validation."""


class WidgetErrorKind(str, Enum):
    """Error categories reported by the Web Playback widget."""

    INITIALIZATION = "initialization_error"
    AUTHENTICATION = "authentication_error"
    ACCOUNT = "account_error"
    PLAYBACK = "playback_error"


class WidgetError(SpotiHooksError):
    """Error reported by the playback widget (or its connect call)."""

    def __init__(self, kind: WidgetErrorKind, message: str):
        self.kind = WidgetErrorKind(kind)
        self.message = message
        super().__init__(f"{self.kind.value}: {message}")


__all__ = [
    "ConfigurationError",
    "InvalidArgument",
    "SpotiHooksError",
    "TransportFailure",
    "WidgetError",
    "WidgetErrorKind",
]
