"""Endpoint namespaces of the Spotify Web API facade."""

from .library import LibraryEndpoint
from .player import PlayerEndpoint
from .search import SearchEndpoint
from .users import UsersEndpoint

__all__ = ["LibraryEndpoint", "PlayerEndpoint", "SearchEndpoint", "UsersEndpoint"]
