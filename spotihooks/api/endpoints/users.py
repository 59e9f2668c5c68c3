"""User profile lookups."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any
from urllib.parse import quote

from ...utils.validation import InputValidator, ensure_valid
from .base import Endpoint


class UsersEndpoint(Endpoint):

    def get_current_user_profile(self) -> "Future[Any]":
        """Get detailed profile information about the current user."""
        return self._api.get({"url": "/me"})

    def get_user_profile(self, user_id: str) -> "Future[Any]":
        """Get public profile information about a user."""
        user = ensure_valid(InputValidator.validate_required_string(user_id, "user_id"))
        return self._api.get({"url": f"/users/{quote(user, safe='')}"})
