"""
📚 Library endpoint namespace.

Retrieve, check and save albums, shows and tracks in the current user's
library. Ids are sent as a comma-separated list; the service accepts at most
50 per request and it is up to the caller to stay under that.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Mapping, Sequence, Union

from ...utils.validation import InputValidator, ensure_valid
from ..options import LibraryOptions, parse_options
from .base import Endpoint

LibraryOptionsArg = Union[LibraryOptions, Mapping[str, Any], None]


class LibraryEndpoint(Endpoint):
    """Saved-item operations, generalised over albums, shows and tracks."""

    prefix = "/me"

    @staticmethod
    def _item_type(item_type: Any) -> str:
        return ensure_valid(InputValidator.validate_library_type(item_type))

    @staticmethod
    def _ids(item_ids: Any) -> str:
        return ",".join(ensure_valid(InputValidator.validate_id_list(item_ids)))

    def get_saved(self, item_type: str, options: LibraryOptionsArg = None) -> "Future[Any]":
        """Get saved items of one type.

        Args:
            item_type: ``albums``, ``shows`` or ``tracks``.
            options: Optional ``limit`` (1-50), ``offset`` and ``market``.
        """
        kind = self._item_type(item_type)
        params = parse_options(LibraryOptions, options).to_params()
        config = {"url": self._path(kind)}
        if params:
            config["params"] = params
        return self._api.get(config)

    def contains(self, item_type: str, item_ids: Sequence[str]) -> "Future[Any]":
        """Check whether items are already saved in the user's library."""
        kind = self._item_type(item_type)
        return self._api.get({
            "url": self._path(kind, "contains"),
            "params": {"ids": self._ids(item_ids)},
        })

    def save(self, item_type: str, item_ids: Sequence[str]) -> "Future[Any]":
        """Save items to the user's library."""
        kind = self._item_type(item_type)
        return self._api.put({
            "url": self._path(kind),
            "params": {"ids": self._ids(item_ids)},
        })

    def get_saved_albums(self, options: LibraryOptionsArg = None) -> "Future[Any]":
        return self.get_saved("albums", options)

    def get_saved_shows(self, options: LibraryOptionsArg = None) -> "Future[Any]":
        return self.get_saved("shows", options)

    def get_saved_tracks(self, options: LibraryOptionsArg = None) -> "Future[Any]":
        return self.get_saved("tracks", options)

    def contains_albums(self, album_ids: Sequence[str]) -> "Future[Any]":
        return self.contains("albums", album_ids)

    def contains_shows(self, show_ids: Sequence[str]) -> "Future[Any]":
        return self.contains("shows", show_ids)

    def contains_tracks(self, track_ids: Sequence[str]) -> "Future[Any]":
        return self.contains("tracks", track_ids)

    def save_albums(self, album_ids: Sequence[str]) -> "Future[Any]":
        return self.save("albums", album_ids)

    def save_shows(self, show_ids: Sequence[str]) -> "Future[Any]":
        return self.save("shows", show_ids)

    def save_tracks(self, track_ids: Sequence[str]) -> "Future[Any]":
        return self.save("tracks", track_ids)
