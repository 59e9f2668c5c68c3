"""
▶️ Player endpoint namespace.

Reads playback state and issues device-targeted commands. Every argument is
validated before the command is built, so an invalid value never reaches the
transport. Nothing is cached between calls.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional, Union

from ...utils.validation import InputValidator, ensure_valid
from ..options import HistoryOptions, parse_options
from .base import Endpoint


def _device(device_id: Any) -> str:
    return ensure_valid(InputValidator.validate_present(device_id, "device_id"))


class PlayerEndpoint(Endpoint):
    """Endpoints for controlling playback on the user's devices."""

    prefix = "/me/player"

    def get_devices(self) -> "Future[Any]":
        """Get the list of devices available for playback."""
        return self._api.get({"url": self._path("devices")})

    def current_playback(self) -> "Future[Any]":
        """Get information about the current playback context."""
        return self._api.get({"url": self.prefix})

    def currently_playing(self) -> "Future[Any]":
        """Get the currently playing item."""
        return self._api.get({"url": self._path("currently-playing")})

    def recently_played(self, options: Union[HistoryOptions, Mapping[str, Any], None] = None) -> "Future[Any]":
        """Get recently played tracks.

        Args:
            options: Optional cursor parameters.
                - ``limit``: Maximum number of items to return (1-50).
                - ``after``: Unix timestamp in ms; items after this cursor.
                - ``before``: Unix timestamp in ms; items before this cursor.
                ``after`` and ``before`` are mutually exclusive.

        Raises:
            InvalidArgument: On unknown keys, out-of-range values or both cursors.
        """
        history = parse_options(HistoryOptions, options)
        config: Dict[str, Any] = {"url": self._path("recently-played")}
        params = history.to_params()
        if params:
            config["params"] = params
        return self._api.get(config)

    def add_to_queue(self, device_id: str, uri: str) -> "Future[Any]":
        """Add a track or episode URI to the end of the device's queue."""
        device = _device(device_id)
        item_uri = ensure_valid(InputValidator.validate_required_string(uri, "uri"))
        return self._api.post({
            "url": self._path("queue"),
            "params": {"device_id": device, "uri": item_uri},
        })

    def transfer_playback(self, device_id: str, autoplay: bool = False) -> "Future[Any]":
        """Transfer playback to the provided device.

        Args:
            device_id: Id of the device this request is targeting.
            autoplay: Start playing on the new device right away.
        """
        device = _device(device_id)
        play = ensure_valid(InputValidator.validate_strict_boolean(autoplay, "play"))
        return self._api.put({
            "url": self.prefix,
            "data": {"device_ids": [device], "play": play},
        })

    def start_playback(self, device_id: str, context_uri: Optional[str] = None) -> "Future[Any]":
        """Start playback on the provided device.

        Args:
            device_id: Id of the device this request is targeting.
            context_uri: Album, artist or playlist to play. Without it the
                current context is resumed.
        """
        device = _device(device_id)
        config: Dict[str, Any] = {
            "url": self._path("play"),
            "params": {"device_id": device},
        }
        if context_uri is not None:
            uri = ensure_valid(InputValidator.validate_required_string(context_uri, "context_uri"))
            config["data"] = {"context_uri": uri}
        return self._api.put(config)

    def resume_playback(self, device_id: str) -> "Future[Any]":
        """Resume playback on the provided device."""
        return self.start_playback(device_id)

    def pause_playback(self, device_id: str) -> "Future[Any]":
        """Pause playback on the provided device."""
        device = _device(device_id)
        return self._api.put({
            "url": self._path("pause"),
            "params": {"device_id": device},
        })

    def seek_position(self, device_id: str, position_ms: int) -> "Future[Any]":
        """Seek to a position in the currently playing track.

        Args:
            device_id: Id of the device this request is targeting.
            position_ms: Position in milliseconds, must not be negative. A
                position past the end of the track skips to the next one.
        """
        device = _device(device_id)
        position = ensure_valid(InputValidator.validate_position_ms(position_ms))
        return self._api.put({
            "url": self._path("seek"),
            "params": {"position_ms": position, "device_id": device},
        })

    def next_track(self, device_id: str) -> "Future[Any]":
        """Skip to the next track on the provided device."""
        device = _device(device_id)
        return self._api.post({
            "url": self._path("next"),
            "params": {"device_id": device},
        })

    def previous_track(self, device_id: str) -> "Future[Any]":
        """Skip to the previous track on the provided device."""
        device = _device(device_id)
        return self._api.post({
            "url": self._path("previous"),
            "params": {"device_id": device},
        })

    def set_volume(self, device_id: str, percent: int) -> "Future[Any]":
        """Set the playback volume (0-100) on the provided device."""
        device = _device(device_id)
        volume = ensure_valid(InputValidator.validate_volume(percent))
        return self._api.put({
            "url": self._path("volume"),
            "params": {"volume_percent": volume, "device_id": device},
        })

    def set_repeat(self, device_id: str, repeat_state: str) -> "Future[Any]":
        """Set the repeat mode.

        Args:
            device_id: Id of the device this request is targeting.
            repeat_state: ``track`` repeats the current track, ``context``
                the current context, ``off`` turns repeat off.
        """
        device = _device(device_id)
        state = ensure_valid(InputValidator.validate_repeat_state(repeat_state))
        return self._api.put({
            "url": self._path("repeat"),
            "params": {"state": state, "device_id": device},
        })

    def set_shuffle(self, device_id: str, shuffle_state: bool) -> "Future[Any]":
        """Toggle shuffle. ``shuffle_state`` must be a real bool."""
        device = _device(device_id)
        state = ensure_valid(InputValidator.validate_strict_boolean(shuffle_state))
        return self._api.put({
            "url": self._path("shuffle"),
            "params": {"state": "true" if state else "false", "device_id": device},
        })
