"""
🎵 Spotify Web API facade.

``SpotifyWebAPI`` holds an access token and exposes ``get``/``post``/``put``
shortcuts. Every call turns a ``RequestConfig`` into exactly one ``Command``
and hands it to the transport, returning the transport's future untouched.
Endpoint namespaces (``player``, ``search``, ``library``, ``users``) are
created with the client and live as long as it does.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..constants import SPOTIFY_API_BASE_URL
from ..errors import InvalidArgument
from ..utils.validation import InputValidator, ensure_valid
from .endpoints import LibraryEndpoint, PlayerEndpoint, SearchEndpoint, UsersEndpoint
from .http import Transport, get_default_transport


class RequestConfig(BaseModel):
    """Per-call request options.

    ``url`` is relative to the client's base URL. Base URL and headers always
    come from the client and cannot be overridden here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(min_length=1)
    params: Optional[Dict[str, Any]] = None
    data: Optional[Any] = None
    timeout: Optional[Union[float, Tuple[float, float]]] = None


@dataclass(frozen=True)
class Command:
    """One fully constructed request, issued at most once."""

    method: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Any] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    base_url: str = SPOTIFY_API_BASE_URL
    timeout: Optional[Union[float, Tuple[float, float]]] = None

    @property
    def full_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.url.lstrip('/')}"


def _coerce_config(config: Union[RequestConfig, Mapping[str, Any]]) -> RequestConfig:
    if isinstance(config, RequestConfig):
        return config
    if not isinstance(config, Mapping):
        raise InvalidArgument("config", "must be a mapping or RequestConfig")
    try:
        return RequestConfig.model_validate(dict(config))
    except ValidationError as e:
        detail = e.errors()[0]
        loc = detail.get("loc") or ("config",)
        raise InvalidArgument(str(loc[0]), detail.get("msg", str(e))) from e


class SpotifyWebAPI:
    """Client for the Spotify Web API bound to a single access token."""

    def __init__(self, access_token: str, *, transport: Optional[Transport] = None):
        token = ensure_valid(InputValidator.validate_required_string(access_token, "access_token"))
        self._base_url = SPOTIFY_API_BASE_URL
        self._headers: Mapping[str, str] = MappingProxyType({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        })
        self._transport = transport if transport is not None else get_default_transport()

        self.player = PlayerEndpoint(self)
        self.search = SearchEndpoint(self)
        self.library = LibraryEndpoint(self)
        self.users = UsersEndpoint(self)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    def build_command(self, method: str, config: Union[RequestConfig, Mapping[str, Any]]) -> Command:
        """Merge the caller's config with the client's base URL and headers."""
        request_config = _coerce_config(config)
        params = {k: v for k, v in (request_config.params or {}).items() if v is not None}
        return Command(
            method=method.upper(),
            url=request_config.url,
            params=params,
            body=request_config.data,
            headers=self._headers,
            base_url=self._base_url,
            timeout=request_config.timeout,
        )

    def request(self, method: str, config: Union[RequestConfig, Mapping[str, Any]]) -> "Future[Any]":
        """Send one request. Failures surface through the returned future."""
        return self._transport.send(self.build_command(method, config))

    def get(self, config: Union[RequestConfig, Mapping[str, Any]]) -> "Future[Any]":
        return self.request("GET", config)

    def post(self, config: Union[RequestConfig, Mapping[str, Any]]) -> "Future[Any]":
        return self.request("POST", config)

    def put(self, config: Union[RequestConfig, Mapping[str, Any]]) -> "Future[Any]":
        return self.request("PUT", config)


__all__ = ["Command", "RequestConfig", "SpotifyWebAPI"]
