#!/usr/bin/env python3
"""
🎧 Playback session for the Web Playback widget.

Owns the lifecycle of one widget instance:

    Uninitialized -> Constructed -> Connecting -> Ready <-> NotReady
                         any state -> Errored (terminal)

Widget callbacks are translated into typed events, applied to the state
machine, then pushed onto ``session.events`` and passed to the registered
handler. Once a ``Ready`` event arrives, ``device_id`` can be used with the
player namespace of ``SpotifyWebAPI``.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional, Union

from ..constants import DEFAULT_PLAYER_NAME, PLAYER_EVENTS
from ..errors import InvalidArgument, WidgetError, WidgetErrorKind
from ..utils.perf_monitor import ObservabilitySink
from ..utils.validation import InputValidator, ensure_valid
from .events import (ConnectionResult, NotReady, PlayerEvent, Ready,
                     SessionState, WidgetFailure, parse_event)
from .handlers import LoggingEventHandler, PlaybackEventHandler
from .widget import PlaybackWidget, TokenCallback, WidgetFactory

TokenSource = Union[str, Callable[[], str]]


def _next_state(current: SessionState, event: PlayerEvent) -> SessionState:
    if current is SessionState.ERRORED:
        return current
    if isinstance(event, WidgetFailure):
        return SessionState.ERRORED
    if isinstance(event, ConnectionResult) and not event.success:
        return SessionState.ERRORED
    if current is SessionState.UNINITIALIZED:
        return current
    if isinstance(event, Ready):
        return SessionState.READY
    if isinstance(event, NotReady):
        return SessionState.NOT_READY
    return current


class PlaybackSession:
    """Connection to the vendor playback widget and its event stream."""

    def __init__(
        self,
        access_token: TokenSource,
        widget_factory: WidgetFactory,
        *,
        name: str = DEFAULT_PLAYER_NAME,
        volume: float = 0.5,
        handler: Optional[PlaybackEventHandler] = None,
        sink: Optional[ObservabilitySink] = None,
    ):
        if not callable(access_token):
            ensure_valid(InputValidator.validate_required_string(access_token, "access_token"))
        if isinstance(volume, bool) or not isinstance(volume, (int, float)) or not 0.0 <= volume <= 1.0:
            raise InvalidArgument("volume", "must be a number between 0.0 and 1.0")

        self._token_source = access_token
        self._widget_factory = widget_factory
        self.name = ensure_valid(InputValidator.validate_required_string(name, "name"))
        self.volume = float(volume)
        self._sink = sink or ObservabilitySink(logging.getLogger("spotihooks.playback"))
        self._handler = handler if handler is not None else LoggingEventHandler(self._sink)

        self._cond = threading.Condition()
        self._state = SessionState.UNINITIALIZED
        self._player: Optional[PlaybackWidget] = None
        self._device_id: Optional[str] = None
        self._error: Optional[WidgetError] = None
        self.events: "queue.Queue[PlayerEvent]" = queue.Queue()

    # -----------------
    # Live handle
    # -----------------

    @property
    def state(self) -> SessionState:
        with self._cond:
            return self._state

    @property
    def player(self) -> Optional[PlaybackWidget]:
        return self._player

    @property
    def device_id(self) -> Optional[str]:
        """Device id from the latest ready event (kept while NotReady)."""
        with self._cond:
            return self._device_id

    @property
    def error(self) -> Optional[WidgetError]:
        with self._cond:
            return self._error

    def raise_if_errored(self) -> None:
        error = self.error
        if error is not None:
            raise error

    # -----------------
    # Token access
    # -----------------

    def _current_token(self) -> str:
        source = self._token_source
        token = source() if callable(source) else source
        return ensure_valid(InputValidator.validate_required_string(token, "access_token"))

    def get_oauth_token(self, callback: TokenCallback) -> None:
        """Token accessor handed to the widget; may be called any number of times."""
        callback(self._current_token())

    # -----------------
    # Lifecycle
    # -----------------

    def initialize(self) -> PlaybackWidget:
        """Construct the widget and attach listeners (Uninitialized -> Constructed)."""
        with self._cond:
            if self._state is not SessionState.UNINITIALIZED:
                raise RuntimeError(f"Playback session already {self._state.value}")
            player = self._widget_factory(
                name=self.name,
                get_oauth_token=self.get_oauth_token,
                volume=self.volume,
            )
            self._player = player
            self._state = SessionState.CONSTRUCTED

        for event_name in PLAYER_EVENTS:
            player.add_listener(event_name, self._listener(event_name))
        self._sink.event("player.constructed", logging.DEBUG, name=self.name)
        return player

    def connect(self) -> "Future[bool]":
        """Connect the widget (Constructed -> Connecting).

        The returned future resolves with the widget's own result. Failure is
        also reflected in the session state once it completes.
        """
        with self._cond:
            if self._state is not SessionState.CONSTRUCTED or self._player is None:
                raise RuntimeError(f"Cannot connect a session that is {self._state.value}")
            player = self._player
            self._state = SessionState.CONNECTING

        try:
            outcome = player.connect()
        except Exception as exc:
            self._dispatch(ConnectionResult(False, f"{exc.__class__.__name__}: {exc}"))
            raise

        if isinstance(outcome, Future):
            future = outcome
        else:
            future = Future()
            future.set_result(bool(outcome))
        future.add_done_callback(self._on_connect_done)
        return future

    def start(self) -> "Future[bool]":
        """Initialize and connect in one step."""
        self.initialize()
        return self.connect()

    def wait_until_ready(self, timeout: Optional[float] = None) -> str:
        """Block until the widget is ready and return its device id.

        Raises:
            WidgetError: If the session has errored.
            TimeoutError: If the timeout elapses first.
        """
        with self._cond:
            finished = self._cond.wait_for(
                lambda: self._state in (SessionState.READY, SessionState.ERRORED),
                timeout=timeout,
            )
            if self._error is not None:
                raise self._error
            if not finished or self._device_id is None:
                raise TimeoutError(f"Playback session not ready (state={self._state.value})")
            return self._device_id

    # -----------------
    # Event delivery
    # -----------------

    def _listener(self, event_name: str) -> Callable[[Any], None]:
        def on_event(payload: Any = None) -> None:
            self.handle_widget_event(event_name, payload)
        return on_event

    def _on_connect_done(self, future: "Future[bool]") -> None:
        try:
            success = bool(future.result())
        except Exception as exc:
            self._dispatch(ConnectionResult(False, f"{exc.__class__.__name__}: {exc}"))
            return
        self._dispatch(ConnectionResult(success, None if success else "connect() reported failure"))

    def handle_widget_event(self, event_name: str, payload: Any) -> None:
        """Entry point for raw widget callbacks."""
        try:
            event = parse_event(event_name, payload)
        except ValueError as exc:
            self._sink.event("player.event.malformed", logging.WARNING, event=event_name, error=str(exc))
            return
        self._dispatch(event)

    def _dispatch(self, event: PlayerEvent) -> None:
        with self._cond:
            previous = self._state
            self._state = _next_state(previous, event)
            if isinstance(event, Ready) and self._state is SessionState.READY:
                self._device_id = event.device_id
            if self._state is SessionState.ERRORED and self._error is None:
                if isinstance(event, WidgetFailure):
                    self._error = event.to_error()
                elif isinstance(event, ConnectionResult):
                    self._error = WidgetError(WidgetErrorKind.INITIALIZATION, event.error or "connect failed")
            self._cond.notify_all()

        if previous is not self._state:
            self._sink.event("player.state", logging.DEBUG, previous=previous.value, current=self._state.value)

        self.events.put(event)
        try:
            self._handler(event)
        except Exception:
            # Widget callbacks run on the vendor's thread; keep the session consistent
            self._sink.logger.exception("player.handler.failed")


__all__ = ["PlaybackSession", "SessionState"]
