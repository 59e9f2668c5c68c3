#!/usr/bin/env python3
"""Centralised HTTP session and transport for Spotify Web API access.

The transport executes one prepared ``Command`` per call on a small thread
pool and hands back a ``concurrent.futures.Future``. It never retries and
never inspects status codes: whatever ``requests`` returns or raises is what
the caller sees.
"""

from __future__ import annotations

import logging
import os
import platform
import time
from concurrent.futures import Future, ThreadPoolExecutor
from threading import RLock
from typing import TYPE_CHECKING, Any, Optional, Protocol, Tuple, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from ..utils.perf_monitor import ObservabilitySink
from ..version import get_full_version

if TYPE_CHECKING:
    from ..config_schema import SpotiHooksConfig
    from .client import Command

TimeoutValue = Union[float, Tuple[float, float]]

_LOGGER = logging.getLogger("spotify.http")
_SESSION_LOCK = RLock()
_SESSION: Optional[requests.Session] = None
_TRANSPORT: Optional["RequestsTransport"] = None


def _parse_timeout_tuple() -> Tuple[float, float]:
    """Parse timeout defaults from environment variables."""
    raw = os.getenv("SPOTIHOOKS_HTTP_TIMEOUTS")
    if raw:
        parts = [p.strip() for p in raw.replace(";", ",").split(",") if p.strip()]
        if len(parts) == 2:
            try:
                return max(0.5, float(parts[0])), max(1.0, float(parts[1]))
            except ValueError:
                pass
    return 4.0, 15.0


DEFAULT_TIMEOUT: Tuple[float, float] = _parse_timeout_tuple()


def _coerce_timeout(value: TimeoutValue, *, clamp: bool = True) -> Tuple[float, float]:
    """Normalise timeout values to a tuple of (connect, read).

    Transport defaults are clamped to at least 0.5s connect and 1s read.
    Per-request overrides pass ``clamp=False`` and are used as given.
    """
    if isinstance(value, tuple):
        if len(value) != 2:
            raise ValueError("Timeout tuples must be length 2 (connect, read)")
        connect, read = float(value[0]), float(value[1])
        if clamp:
            return max(0.5, connect), max(1.0, read)
        return connect, read
    numeric = max(0.5, float(value)) if clamp else float(value)
    return numeric, numeric


def _build_retry_configuration() -> Retry:
    """Adapter retry policy: no retries of any kind, redirects still followed."""
    return Retry(
        total=False,
        connect=0,
        read=0,
        status=0,
        other=0,
        redirect=5,
        status_forcelist=(),
        respect_retry_after_header=False,
        raise_on_status=False,
    )


def build_session(config: Optional["SpotiHooksConfig"] = None) -> requests.Session:
    """Create a configured requests.Session with pooled, non-retrying adapters."""
    session = requests.Session()

    pool_connections = config.http_pool_connections if config else 10
    pool_maxsize = config.http_pool_maxsize if config else 20
    adapter = HTTPAdapter(
        max_retries=_build_retry_configuration(),
        pool_connections=pool_connections,
        pool_maxsize=pool_maxsize,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    session.headers.update(
        {
            "Connection": "keep-alive",
            "Accept": "application/json",
            "User-Agent": (
                f"SpotiHooks/{get_full_version()} (Python {platform.python_version()}; "
                f"Requests {requests.__version__})"
            ),
        }
    )
    session.trust_env = False

    _LOGGER.debug(
        "HTTP session configured",
        extra={
            "http.pool_connections": pool_connections,
            "http.pool_maxsize": pool_maxsize,
        },
    )
    return session


def get_http_session() -> requests.Session:
    """Return the shared HTTP session, creating it if necessary."""
    global _SESSION
    if _SESSION is None:
        with _SESSION_LOCK:
            if _SESSION is None:
                _SESSION = build_session()
    return _SESSION


def set_http_session(session: requests.Session) -> None:
    """
    Override the shared HTTP session (primarily for testing).

    Args:
        session: Preconfigured session instance
    """
    global _SESSION, _TRANSPORT
    with _SESSION_LOCK:
        _SESSION = session
        _TRANSPORT = None


class Transport(Protocol):
    """Anything that can execute a prepared command asynchronously."""

    def send(self, command: "Command") -> "Future[requests.Response]":
        ...


def _metric_label(command: "Command") -> str:
    path_fragment = command.url.strip("/").replace("/", ".") or "root"
    return f"spotify.http.{command.method.lower()}.{path_fragment}"


class RequestsTransport:
    """Execute commands with ``requests`` on a thread pool."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        executor: Optional[ThreadPoolExecutor] = None,
        max_workers: int = 4,
        timeout: TimeoutValue = DEFAULT_TIMEOUT,
        sink: Optional[ObservabilitySink] = None,
    ) -> None:
        self._session = session
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max(1, int(max_workers)),
            thread_name_prefix="spotihooks-http",
        )
        self._timeout = _coerce_timeout(timeout)
        self._sink = sink or ObservabilitySink(_LOGGER)

    @classmethod
    def from_config(cls, config: "SpotiHooksConfig", *, sink: Optional[ObservabilitySink] = None) -> "RequestsTransport":
        return cls(
            build_session(config),
            max_workers=config.http_max_workers,
            timeout=config.http_timeout,
            sink=sink,
        )

    @property
    def session(self) -> requests.Session:
        return self._session if self._session is not None else get_http_session()

    def send(self, command: "Command") -> "Future[requests.Response]":
        return self._executor.submit(self._execute, command)

    def _execute(self, command: "Command") -> requests.Response:
        request_timeout = self._timeout
        if command.timeout is not None:
            request_timeout = _coerce_timeout(command.timeout, clamp=False)

        start = time.perf_counter()
        try:
            with self._sink.time_block(_metric_label(command)):
                return self.session.request(
                    method=command.method,
                    url=command.full_url,
                    headers=dict(command.headers),
                    params=command.params or None,
                    json=command.body,
                    timeout=request_timeout,
                )
        except requests.exceptions.RequestException as exc:
            self._sink.event(
                "spotify.request.error",
                logging.WARNING,
                method=command.method,
                url=command.url,
                elapsed=round(time.perf_counter() - start, 3),
                error=exc.__class__.__name__,
            )
            raise

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def get_default_transport() -> RequestsTransport:
    """Return the shared transport used by clients built without one."""
    global _TRANSPORT
    if _TRANSPORT is None:
        with _SESSION_LOCK:
            if _TRANSPORT is None:
                _TRANSPORT = RequestsTransport()
    return _TRANSPORT


__all__ = [
    "DEFAULT_TIMEOUT",
    "RequestsTransport",
    "Transport",
    "build_session",
    "get_default_transport",
    "get_http_session",
    "set_http_session",
]
