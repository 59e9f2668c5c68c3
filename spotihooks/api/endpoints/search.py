"""
🔎 Search endpoint namespace.

Catalog search over albums, artists, playlists, tracks, shows and episodes.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, List, Mapping, Sequence, Union

from ...constants import SEARCH_ITEM_TYPES
from ...utils.validation import InputValidator, ensure_valid
from ..options import SearchOptions, parse_options
from .base import Endpoint

SearchOptionsArg = Union[SearchOptions, Mapping[str, Any], None]


class SearchEndpoint(Endpoint):
    """Query the catalog for items matching a keyword string."""

    prefix = "/search"

    def confirm_search_types(self, item_types: Sequence[str]) -> List[str]:
        """Confirm that each search type is valid.

        Valid search types are ``album``, ``artist``, ``playlist``, ``track``,
        ``show`` and ``episode``.

        Raises:
            InvalidArgument: If the list is empty or any entry is unknown.
        """
        return ensure_valid(InputValidator.validate_item_types(item_types, SEARCH_ITEM_TYPES, "type"))

    def query(self, keywords: str, item_types: Sequence[str], options: SearchOptionsArg = None) -> "Future[Any]":
        """Query the search endpoint.

        Args:
            keywords: Keywords to include in the search query.
            item_types: Item types to search for.
            options: Optional ``limit``, ``offset``, ``market`` and
                ``include_external``.
        """
        types = self.confirm_search_types(item_types)
        q = ensure_valid(InputValidator.validate_required_string(keywords, "q"))
        search_options = parse_options(SearchOptions, options)
        return self._api.get({
            "url": self.prefix,
            "params": {"q": q, "type": ",".join(types), **search_options.to_params()},
        })

    def albums(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["album"], options)

    def artists(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["artist"], options)

    def playlists(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["playlist"], options)

    def tracks(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["track"], options)

    def shows(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["show"], options)

    def episodes(self, keywords: str, options: SearchOptionsArg = None) -> "Future[Any]":
        return self.query(keywords, ["episode"], options)
