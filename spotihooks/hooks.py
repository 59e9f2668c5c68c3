"""
🪝 Entry points mirroring the two hooks of the browser library.

``use_spotify_web_api`` returns a client bound to a token.
``use_spotify_web_playback_sdk`` returns a not-yet-started playback session
together with the callback to run once the vendor SDK has loaded.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Tuple

from .api.client import SpotifyWebAPI
from .api.http import Transport
from .config_schema import SpotiHooksConfig
from .errors import InvalidArgument
from .playback.handlers import PlaybackEventHandler
from .playback.session import PlaybackSession, TokenSource
from .playback.widget import WidgetFactory
from .utils.perf_monitor import ObservabilitySink

_PLAYER_OPTIONS = ("name", "volume")


def use_spotify_web_api(access_token: str, *, transport: Optional[Transport] = None) -> SpotifyWebAPI:
    """Build a Web API client for ``access_token``."""
    return SpotifyWebAPI(access_token, transport=transport)


def use_spotify_web_playback_sdk(
    access_token: TokenSource,
    options: Optional[Mapping[str, Any]] = None,
    *,
    widget_factory: WidgetFactory,
    handler: Optional[PlaybackEventHandler] = None,
    sink: Optional[ObservabilitySink] = None,
    config: Optional[SpotiHooksConfig] = None,
) -> Tuple[PlaybackSession, Callable[[], PlaybackSession]]:
    """Prepare a playback session.

    ``options`` may carry ``name`` and ``volume``; missing values come from
    ``config`` (or the schema defaults). ``session.player`` stays ``None``
    until the returned ``on_sdk_ready`` callback runs.

    Example:
        >>> session, on_ready = use_spotify_web_playback_sdk(token, {"volume": 0.3}, widget_factory=Player)
        >>> on_ready()
        >>> device_id = session.wait_until_ready(timeout=10)
    """
    options = dict(options or {})
    unknown = sorted(set(options) - set(_PLAYER_OPTIONS))
    if unknown:
        raise InvalidArgument("options", f"unsupported keys: {', '.join(unknown)}")

    settings = config or SpotiHooksConfig()
    session = PlaybackSession(
        access_token,
        widget_factory,
        name=options.get("name", settings.player_name),
        volume=options.get("volume", settings.player_volume),
        handler=handler,
        sink=sink,
    )

    def on_sdk_ready() -> PlaybackSession:
        session.start()
        return session

    return session, on_sdk_ready


__all__ = ["use_spotify_web_api", "use_spotify_web_playback_sdk"]
