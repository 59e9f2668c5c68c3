"""
Typed events for the Web Playback widget lifecycle.

The widget reports seven named events with loosely shaped payloads.
``parse_event`` turns each one into a small frozen dataclass so handlers and
queue consumers can match on type instead of on event-name strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from ..errors import WidgetError, WidgetErrorKind


class SessionState(str, Enum):
    """Connection lifecycle of a playback session."""

    UNINITIALIZED = "uninitialized"
    CONSTRUCTED = "constructed"
    CONNECTING = "connecting"
    READY = "ready"
    NOT_READY = "not_ready"
    ERRORED = "errored"


@dataclass(frozen=True)
class Ready:
    """The widget is addressable as a Connect device."""
    device_id: str


@dataclass(frozen=True)
class NotReady:
    """The device went offline (e.g. another tab took the audio output)."""
    device_id: str


@dataclass(frozen=True)
class PlayerStateChanged:
    state: Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class WidgetFailure:
    kind: WidgetErrorKind
    message: str

    def to_error(self) -> WidgetError:
        return WidgetError(self.kind, self.message)


@dataclass(frozen=True)
class ConnectionResult:
    """Outcome of ``connect()``, observed once it completes."""
    success: bool
    error: Optional[str] = None


PlayerEvent = Union[Ready, NotReady, PlayerStateChanged, WidgetFailure, ConnectionResult]

_ERROR_EVENTS = {kind.value: kind for kind in WidgetErrorKind}


def _payload_value(payload: Any, key: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(key)
    return getattr(payload, key, None)


def parse_event(event_name: str, payload: Any) -> PlayerEvent:
    """Translate a raw widget callback into a typed event.

    Raises:
        ValueError: For unknown event names or payloads missing a device id.
    """
    if event_name in _ERROR_EVENTS:
        message = _payload_value(payload, "message")
        return WidgetFailure(_ERROR_EVENTS[event_name], str(message) if message is not None else "")

    if event_name == "player_state_changed":
        # The widget sends the state object itself; some wrappers nest it under "state"
        nested = _payload_value(payload, "state")
        state = nested if isinstance(nested, Mapping) else payload
        return PlayerStateChanged(state if isinstance(state, Mapping) else None)

    if event_name in ("ready", "not_ready"):
        device_id = _payload_value(payload, "device_id")
        if not isinstance(device_id, str) or not device_id:
            raise ValueError(f"{event_name} event without device_id")
        return Ready(device_id) if event_name == "ready" else NotReady(device_id)

    raise ValueError(f"Unknown player event: {event_name}")
