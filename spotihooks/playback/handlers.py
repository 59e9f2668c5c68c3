"""
Default playback event handler.

Logs every widget event through the injected observability sink. Errors are
also surfaced by the session itself; this handler only records them.
"""

import logging
from typing import Callable, Optional

from ..utils.perf_monitor import ObservabilitySink
from .events import (ConnectionResult, NotReady, PlayerEvent,
                     PlayerStateChanged, Ready, WidgetFailure)

PlaybackEventHandler = Callable[[PlayerEvent], None]


class LoggingEventHandler:
    """Record widget events as structured log entries."""

    def __init__(self, sink: Optional[ObservabilitySink] = None):
        self._sink = sink or ObservabilitySink(logging.getLogger("spotihooks.playback"))

    def __call__(self, event: PlayerEvent) -> None:
        if isinstance(event, WidgetFailure):
            self._sink.event(f"player.{event.kind.value}", logging.ERROR, message=event.message)
        elif isinstance(event, Ready):
            self._sink.event("player.ready", logging.INFO, device_id=event.device_id)
        elif isinstance(event, NotReady):
            self._sink.event("player.not_ready", logging.WARNING, device_id=event.device_id)
        elif isinstance(event, PlayerStateChanged):
            paused = event.state.get("paused") if event.state else None
            self._sink.event("player.state_changed", logging.DEBUG, has_state=event.state is not None, paused=paused)
        elif isinstance(event, ConnectionResult):
            if event.success:
                self._sink.event("player.connected", logging.INFO)
            else:
                self._sink.event("player.connect_failed", logging.ERROR, error=event.error)
