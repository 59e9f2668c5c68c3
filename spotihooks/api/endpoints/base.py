"""Shared plumbing for endpoint namespaces."""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import SpotifyWebAPI


class Endpoint:
    """A group of operations sharing one resource path prefix.

    The namespace only holds a weak proxy to its client: it must never keep
    a client (and its token) alive on its own.
    """

    prefix = ""

    def __init__(self, api: "SpotifyWebAPI"):
        self._api = weakref.proxy(api)

    def _path(self, *segments: str) -> str:
        return "/".join([self.prefix, *segments]) if segments else self.prefix
