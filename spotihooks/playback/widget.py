"""Interface of the vendor playback widget consumed by ``PlaybackSession``."""

from concurrent.futures import Future
from typing import Any, Callable, Protocol, Union

TokenCallback = Callable[[str], None]
TokenAccessor = Callable[[TokenCallback], None]


class PlaybackWidget(Protocol):
    """Handle returned by the vendor SDK's player constructor."""

    def connect(self) -> Union["Future[bool]", bool]:
        ...

    def add_listener(self, event_name: str, callback: Callable[[Any], None]) -> Any:
        ...


class WidgetFactory(Protocol):
    """Builds a widget from a display name, a token accessor and a volume."""

    def __call__(self, *, name: str, get_oauth_token: TokenAccessor, volume: float) -> PlaybackWidget:
        ...
