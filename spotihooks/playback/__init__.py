"""Web Playback widget session, typed events and default handlers."""

from .events import (ConnectionResult, NotReady, PlayerEvent,
                     PlayerStateChanged, Ready, SessionState, WidgetFailure,
                     parse_event)
from .handlers import LoggingEventHandler, PlaybackEventHandler
from .session import PlaybackSession
from .widget import PlaybackWidget, TokenAccessor, TokenCallback, WidgetFactory

__all__ = [
    "ConnectionResult",
    "LoggingEventHandler",
    "NotReady",
    "PlaybackEventHandler",
    "PlaybackSession",
    "PlaybackWidget",
    "PlayerEvent",
    "PlayerStateChanged",
    "Ready",
    "SessionState",
    "TokenAccessor",
    "TokenCallback",
    "WidgetFactory",
    "WidgetFailure",
    "parse_event",
]
