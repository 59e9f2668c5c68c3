"""Spotify Web API facade: client, transport and endpoint namespaces."""

from .client import Command, RequestConfig, SpotifyWebAPI
from .http import RequestsTransport, Transport, build_session, get_default_transport
from .options import HistoryOptions, LibraryOptions, SearchOptions

__all__ = [
    "Command",
    "HistoryOptions",
    "LibraryOptions",
    "RequestConfig",
    "RequestsTransport",
    "SearchOptions",
    "SpotifyWebAPI",
    "Transport",
    "build_session",
    "get_default_transport",
]
